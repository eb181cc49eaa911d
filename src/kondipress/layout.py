"""
Side-by-side layout of images scaled to a common height.

The layout is pure geometry: it only needs the pixel size of every input and
never touches pixel data. :py:func:`compute_layout` validates the sizes and
returns a :py:class:`Layout` that the compositor draws from.

Example::

    from kondipress.layout import compute_layout

    layout = compute_layout([(100, 50), (80, 100)])
    layout.target_height  # 100
    layout.scaled_widths  # (200.0, 80.0)
    layout.offsets  # (0.0, 200.0)
    layout.size  # (280, 100)
"""

import itertools
import logging
import math
import numbers
from typing import Any, Iterable

from attrs import define, field

from kondipress.errors import EmptyInputError, InvalidImageError

logger = logging.getLogger(__name__)

# Absorbs floating-point noise before rounding edges up.
_EPSILON = 1e-6


@define(frozen=True)
class Layout:
    """
    Geometry of a horizontal composite.

    .. py:attribute:: target_height

        The common height every image is scaled to, the largest input height.

    .. py:attribute:: scaled_widths

        Real-valued width of each image after scaling, in input order.

    .. py:attribute:: offsets

        Real-valued left edge of each image, the running sum of the preceding
        scaled widths.
    """

    target_height: int
    scaled_widths: tuple[float, ...] = field(converter=tuple)
    offsets: tuple[float, ...] = field(converter=tuple)

    def __len__(self) -> int:
        return len(self.scaled_widths)

    @property
    def total_width(self) -> float:
        """Exact sum of the scaled widths."""
        return math.fsum(self.scaled_widths)

    @property
    def boxes(self) -> tuple[tuple[int, int, int, int], ...]:
        """
        Integer ``(left, top, right, bottom)`` pixel box of each image.

        Left edges are the offsets rounded up. Each box ends where the next
        one starts and the last one ends at the rounded-up total width, so
        the boxes tile the canvas and each is within one pixel of its scaled
        width. Boxes are never narrower than one pixel.
        """
        height = self.height
        lefts: list[int] = []
        for offset in self.offsets:
            left = math.ceil(offset - _EPSILON)
            if lefts:
                left = max(left, lefts[-1] + 1)
            lefts.append(left)
        last = max(math.ceil(self.total_width - _EPSILON), lefts[-1] + 1)
        rights = lefts[1:] + [last]
        return tuple((left, 0, right, height) for left, right in zip(lefts, rights))

    @property
    def width(self) -> int:
        """Width of the output raster in pixels."""
        return self.boxes[-1][2]

    @property
    def height(self) -> int:
        """Height of the output raster in pixels."""
        return math.ceil(self.target_height)

    @property
    def size(self) -> tuple[int, int]:
        """Size of the output raster, ``(width, height)``."""
        return self.width, self.height


def _is_positive(value: Any) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def compute_layout(sizes: Iterable[tuple[int, int]]) -> Layout:
    """
    Compute the horizontal layout for images of the given sizes.

    Every image is scaled to the largest height while keeping its aspect
    ratio, then placed left to right in input order.

    Args:
        sizes: ``(width, height)`` of each image, in drawing order

    Returns:
        :py:class:`Layout` of the composite

    Raises:
        EmptyInputError: if ``sizes`` is empty
        InvalidImageError: if a width or height is not a positive finite
            number
    """
    sizes = list(sizes)
    if not sizes:
        raise EmptyInputError("At least one image is required.")
    for index, (width, height) in enumerate(sizes):
        if not (_is_positive(width) and _is_positive(height)):
            raise InvalidImageError(
                f"Image {index} has an invalid size: {width!r}x{height!r}"
            )

    target_height = max(height for _, height in sizes)
    scaled_widths = [target_height * width / height for width, height in sizes]
    offsets = [0.0] + list(itertools.accumulate(scaled_widths[:-1]))
    layout = Layout(target_height, scaled_widths, offsets)
    logger.debug(
        "Layout of %d image(s): height=%d widths=%s canvas=%s"
        % (len(layout), target_height, layout.scaled_widths, layout.size)
    )
    return layout
