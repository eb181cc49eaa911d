"""
Compositor: merge images side by side at a common height.

Every image is scaled to the height of the tallest one, keeping its aspect
ratio, and the results are drawn left to right in input order with no gaps.
The composite is encoded as JPEG.

Example usage::

    from kondipress import ImageSource, compose

    sources = [ImageSource.open(name) for name in ('a.jpg', 'b.png')]
    result = compose(sources, quality=90)
    print(result.size)
    result.save('merged.jpg')

:py:func:`compose` is a pure function of its inputs: it never mutates the
given images and keeps no state between calls.
"""

import base64
import io
import logging
import os
from typing import BinaryIO, Iterable, Union

import numpy as np
from attrs import define, field
from PIL import Image, ImageColor

from kondipress import pil_io
from kondipress.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_QUALITY,
    MAX_JPEG_DIMENSION,
    MIMETYPES,
    OUTPUT_FORMAT,
    Resample,
)
from kondipress.errors import OutputTooLargeError
from kondipress.layout import Layout, compute_layout
from kondipress.source import ImageSource

logger = logging.getLogger(__name__)

Color = Union[str, tuple[int, int, int]]


@define(frozen=True)
class CompositeResult:
    """
    Encoded composite image.

    .. py:attribute:: data

        Encoded image bytes.

    .. py:attribute:: width

        Width of the composite in pixels.

    .. py:attribute:: height

        Height of the composite in pixels, the target height of the layout.

    .. py:attribute:: layout

        :py:class:`~kondipress.layout.Layout` the composite was drawn from.

    .. py:attribute:: format

        Encoding name, always ``'JPEG'``.
    """

    data: bytes = field(repr=False)
    width: int
    height: int
    layout: Layout = field(repr=False)
    format: str = OUTPUT_FORMAT

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @property
    def mimetype(self) -> str:
        return MIMETYPES[self.format]

    def topil(self) -> Image.Image:
        """Decode the composite back into a PIL image."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def save(self, fp: Union[BinaryIO, str, os.PathLike]) -> None:
        """
        Write the encoded composite.

        :param fp: filename or file-like object.
        """
        if isinstance(fp, (str, os.PathLike)):
            with open(fp, "wb") as f:
                f.write(self.data)
        else:
            fp.write(self.data)

    def data_url(self) -> str:
        """Return the composite as a ``data:`` URL."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return "data:%s;base64,%s" % (self.mimetype, encoded)


def compose(
    images: Iterable[ImageSource],
    quality: int = DEFAULT_QUALITY,
    background: Color = DEFAULT_BACKGROUND,
    resample: Resample = Resample.LANCZOS,
) -> CompositeResult:
    """
    Compose images side by side and encode the result as JPEG.

    Args:
        images: :py:class:`~kondipress.source.ImageSource` objects in
            left-to-right order
        quality: JPEG quality, 1 (worst) to 95 (best)
        background: color under transparent pixels, an RGB tuple or any
            color string PIL understands
        resample: filter used to scale the images

    Returns:
        :py:class:`CompositeResult` sized to the layout of the images

    Raises:
        EmptyInputError: if no images are given
        InvalidImageError: if an image has a non-positive width or height
        OutputTooLargeError: if the composite is wider or taller than
            JPEG allows
        ValueError: if ``quality`` or ``background`` is invalid
    """
    if not isinstance(quality, int) or not 1 <= quality <= 95:
        raise ValueError(f"Quality must be in range [1, 95], got {quality!r}")

    image, layout = _compose(images, background, resample)
    buffer = io.BytesIO()
    image.save(buffer, format=OUTPUT_FORMAT, quality=quality)
    data = buffer.getvalue()
    logger.debug("Encoded %dx%d composite: %d bytes" % (image.size + (len(data),)))
    return CompositeResult(data, image.width, image.height, layout)


def compose_pil(
    images: Iterable[ImageSource],
    background: Color = DEFAULT_BACKGROUND,
    resample: Resample = Resample.LANCZOS,
) -> Image.Image:
    """
    Compose images side by side and return the unencoded RGB image.

    Takes the same arguments as :py:func:`compose`, minus ``quality``.
    """
    image, _ = _compose(images, background, resample)
    return image


def _compose(
    images: Iterable[ImageSource],
    background: Color,
    resample: Resample,
) -> tuple[Image.Image, Layout]:
    sources = list(images)
    for index, source in enumerate(sources):
        if not isinstance(source, ImageSource):
            raise TypeError(
                f"Image {index}: expected ImageSource, got {type(source).__name__}"
            )
    background = _parse_color(background)

    # Validates every size before the canvas is allocated.
    layout = compute_layout(source.size for source in sources)

    width, height = layout.size
    if max(width, height) > MAX_JPEG_DIMENSION:
        raise OutputTooLargeError(
            "Composite of %dx%d exceeds the maximum size of %d pixels"
            % (width, height, MAX_JPEG_DIMENSION)
        )
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:, :] = background
    for source, box in zip(sources, layout.boxes):
        paste(canvas, box, _render(source, box, background, resample))
    return Image.fromarray(canvas), layout


def _render(
    source: ImageSource,
    box: tuple[int, int, int, int],
    background: tuple[int, int, int],
    resample: Resample,
) -> np.ndarray:
    """Scale one image to its box and return the RGB pixels."""
    image = pil_io.to_rgb(source.image, background)
    size = (box[2] - box[0], box[3] - box[1])
    if image.size != size:
        logger.debug("Resizing %r to %dx%d" % ((source,) + size))
        image = image.resize(size, resample=Image.Resampling(resample))
    return np.asarray(image)


def paste(
    canvas: np.ndarray, box: tuple[int, int, int, int], values: np.ndarray
) -> np.ndarray:
    """Copy ``values`` into ``canvas`` at ``box`` in place."""
    left, top, right, bottom = box
    canvas[top:bottom, left:right, :] = values[: bottom - top, : right - left, :]
    return canvas


def _parse_color(color: Color) -> tuple[int, int, int]:
    if isinstance(color, str):
        return ImageColor.getrgb(color)[:3]
    rgb = tuple(color)
    if len(rgb) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in rgb):
        raise ValueError(f"Invalid background color: {color!r}")
    return rgb  # type: ignore[return-value]
