"""
kondipress: merge photos side by side into a single JPEG.

Every photo is scaled to the height of the tallest one, keeping its aspect
ratio, and the photos are placed left to right in the given order.

Basic usage::

    from kondipress import compose, load_images

    sources = load_images(['left.jpg', 'middle.png', 'right.jpg'])
    result = compose(sources)
    result.save('kondipress-merged.jpg')

Architecture:

- :py:mod:`kondipress.layout`: Geometry of the composite
- :py:mod:`kondipress.compositor`: Rendering and JPEG encoding
- :py:mod:`kondipress.source`: Decoded image handles
- :py:mod:`kondipress.loader`: Concurrent decoding
- :py:mod:`kondipress.selection`: Ordered photo list with the merge policy
"""

from kondipress.compositor import CompositeResult, compose, compose_pil
from kondipress.errors import (
    EmptyInputError,
    InvalidImageError,
    KondipressError,
    NoResultError,
    OutputTooLargeError,
    SelectionError,
    TooFewImagesError,
    TooManyImagesError,
)
from kondipress.layout import Layout, compute_layout
from kondipress.loader import load_images
from kondipress.selection import PhotoSelection
from kondipress.source import ImageSource
from kondipress.version import __version__

__all__ = [
    "CompositeResult",
    "EmptyInputError",
    "ImageSource",
    "InvalidImageError",
    "KondipressError",
    "Layout",
    "NoResultError",
    "OutputTooLargeError",
    "PhotoSelection",
    "SelectionError",
    "TooFewImagesError",
    "TooManyImagesError",
    "__version__",
    "compose",
    "compose_pil",
    "compute_layout",
    "load_images",
]
