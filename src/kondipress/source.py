"""
Decoded image handles.

:py:class:`ImageSource` wraps a fully decoded PIL image together with its
pixel size. It is the only input the compositor accepts, so anything that
fails to decode is rejected here, before composition.

Example usage::

    from kondipress.source import ImageSource

    source = ImageSource.open('left.jpg')
    print(source.size, source.aspect_ratio)
"""

import io
import logging
import os
from typing import Any, BinaryIO, Optional, Union

from attrs import define, field
from PIL import Image, ImageOps, UnidentifiedImageError

from kondipress.errors import InvalidImageError

logger = logging.getLogger(__name__)


@define(frozen=True, eq=False)
class ImageSource:
    """
    Immutable handle to a decoded raster image.

    .. py:attribute:: image

        The decoded :py:class:`PIL.Image.Image`. It is never modified.

    .. py:attribute:: name

        Optional label, typically the file name, used in logs and messages.
    """

    image: Image.Image = field(repr=False)
    name: Optional[str] = field(default=None)

    @image.validator
    def _validate_image(self, attribute: Any, value: Any) -> None:
        if not isinstance(value, Image.Image):
            raise TypeError(f"Expected PIL.Image.Image, got {type(value).__name__}")

    @classmethod
    def frompil(cls, image: Image.Image, name: Optional[str] = None) -> "ImageSource":
        """
        Wrap an already decoded PIL image.

        :param image: :py:class:`PIL.Image.Image` object.
        :param name: optional label.
        :return: :py:class:`ImageSource`
        """
        return cls(image, name=name)

    @classmethod
    def open(
        cls,
        fp: Union[BinaryIO, str, bytes, os.PathLike],
        name: Optional[str] = None,
    ) -> "ImageSource":
        """
        Decode an image file.

        The whole file is decoded before returning and the EXIF orientation
        is applied, so ``width`` and ``height`` are those of the upright
        image.

        :param fp: filename, raw bytes, or file-like object.
        :param name: optional label, defaults to the file name.
        :return: :py:class:`ImageSource`
        :raise InvalidImageError: if the data cannot be decoded.
        :raise OSError: if the file cannot be read.
        """
        if isinstance(fp, (str, os.PathLike)):
            name = name or os.path.basename(os.fspath(fp))
            with open(fp, "rb") as f:
                return cls._decode(f, name)
        if isinstance(fp, bytes):
            fp = io.BytesIO(fp)
        return cls._decode(fp, name)

    @classmethod
    def _decode(cls, fp: BinaryIO, name: Optional[str]) -> "ImageSource":
        label = name or "<stream>"
        try:
            with Image.open(fp) as image:
                image.load()
                decoded = ImageOps.exif_transpose(image)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
        ) as e:
            raise InvalidImageError(f"Cannot decode image {label}: {e}") from e

        logger.debug("Decoded %s: %s %dx%d" % ((label, decoded.mode) + decoded.size))
        return cls(decoded, name=name)

    @property
    def width(self) -> int:
        """Width of the image in pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Height of the image in pixels."""
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.image.size

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        if self.height <= 0:
            raise InvalidImageError(f"Image {self.name or ''} has no height")
        return self.width / self.height

    def __repr__(self) -> str:
        return "%s(name=%r, mode=%s, size=%dx%d)" % (
            (self.__class__.__name__, self.name, self.image.mode) + self.size
        )
