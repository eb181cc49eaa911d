"""
PIL IO module.

Decoded images arrive in whatever mode their file used. Before drawing they
are normalized to RGB, the only mode the JPEG output needs.
"""

import io
import logging

from PIL import Image, ImageCms

from kondipress.constants import DEFAULT_BACKGROUND

logger = logging.getLogger(__name__)

_ALPHA_MODES = ("RGBA", "RGBa", "LA", "La", "PA")
_INTEGER_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")


def has_transparency(image: Image.Image) -> bool:
    """Check if the image carries an alpha channel or a transparent color."""
    return image.mode in _ALPHA_MODES or "transparency" in image.info


def to_rgb(
    image: Image.Image, background: tuple[int, int, int] = DEFAULT_BACKGROUND
) -> Image.Image:
    """
    Convert a decoded image to RGB.

    Embedded ICC profiles are converted to sRGB, transparent pixels are
    flattened over ``background``, and high bit-depth grayscale is scaled
    down to 8 bits.

    Args:
        image: decoded PIL image, left untouched
        background: RGB color placed under transparent pixels

    Returns:
        a new RGB image of the same size
    """
    icc_profile = image.info.get("icc_profile")
    if image.mode == "RGB" and not icc_profile and not has_transparency(image):
        return image.copy()

    if icc_profile and image.mode in ("RGB", "CMYK"):
        image = _apply_icc(image, icc_profile)

    if has_transparency(image):
        logger.debug("Flattening %s alpha over %r" % (image.mode, background))
        return _flatten(image, background)

    if image.mode in _INTEGER_MODES:
        image = image.convert("I").point(lambda x: x * (1.0 / 256.0)).convert("L")
    elif image.mode == "F":
        image = image.point(lambda x: x * 255.0).convert("L")
    return image.convert("RGB")


def _flatten(image: Image.Image, background: tuple[int, int, int]) -> Image.Image:
    rgba = image.convert("RGBA")
    base = Image.new("RGBA", rgba.size, tuple(background) + (255,))
    base.alpha_composite(rgba)
    return base.convert("RGB")


def _apply_icc(image: Image.Image, icc_profile: bytes) -> Image.Image:
    """Apply ICC Color profile."""
    try:
        in_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
        out_profile = ImageCms.createProfile("sRGB")
        return ImageCms.profileToProfile(
            image, in_profile, out_profile, outputMode="RGB"
        )
    except (OSError, ImageCms.PyCMSError) as e:
        logger.warning("Cannot apply ICC profile: %s" % (e))

    return image
