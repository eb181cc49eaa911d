"""
Various constants for kondipress.
"""

from enum import IntEnum

from PIL import Image

#: Maximum number of photos a selection accepts.
MAX_IMAGES = 3

#: Minimum number of photos required before merging.
MIN_IMAGES = 2

#: The only output encoding.
OUTPUT_FORMAT = "JPEG"

#: Largest width or height a JPEG can hold.
MAX_JPEG_DIMENSION = 65500

#: MIME type per output encoding.
MIMETYPES = {"JPEG": "image/jpeg"}

#: Default JPEG quality.
DEFAULT_QUALITY = 92

#: Fill colour under transparent pixels, since JPEG carries no alpha.
DEFAULT_BACKGROUND = (255, 255, 255)

#: Default file name of the downloaded composite.
DEFAULT_FILENAME = "kondipress-merged.jpg"


class Resample(IntEnum):
    """
    Resampling filter used when scaling images to the target height.
    """

    NEAREST = Image.Resampling.NEAREST
    BILINEAR = Image.Resampling.BILINEAR
    BICUBIC = Image.Resampling.BICUBIC
    LANCZOS = Image.Resampling.LANCZOS
