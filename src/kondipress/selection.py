"""
Photo selection.

:py:class:`PhotoSelection` is the ordered list of photos a user is arranging.
It enforces the merge policy (at most three photos, at least two to merge)
and drops the merged result whenever the list changes, so a stale composite
is never saved.

Example usage::

    from kondipress import ImageSource, PhotoSelection

    selection = PhotoSelection()
    selection.add(ImageSource.open('left.jpg'), ImageSource.open('right.jpg'))
    selection.move(1, 0)
    selection.merge()
    selection.save('kondipress-merged.jpg')
"""

import logging
import os
from typing import Any, BinaryIO, Iterator, Optional, Union

from kondipress.compositor import CompositeResult, compose
from kondipress.constants import MAX_IMAGES, MIN_IMAGES
from kondipress.errors import NoResultError, TooFewImagesError, TooManyImagesError
from kondipress.source import ImageSource

logger = logging.getLogger(__name__)


class PhotoSelection:
    """
    Ordered collection of photos to merge.

    :param max_images: maximum number of photos held at once.
    :param min_images: minimum number of photos required by :py:meth:`merge`.
    """

    def __init__(self, max_images: int = MAX_IMAGES, min_images: int = MIN_IMAGES):
        if not 1 <= min_images <= max_images:
            raise ValueError(
                f"Invalid limits: min_images={min_images}, max_images={max_images}"
            )
        self.max_images = max_images
        self.min_images = min_images
        self._photos: list[ImageSource] = []
        self._result: Optional[CompositeResult] = None

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[ImageSource]:
        return iter(self._photos)

    def __getitem__(self, index: int) -> ImageSource:
        return self._photos[index]

    def __repr__(self) -> str:
        return "%s(photos=%d/%d, merged=%s)" % (
            self.__class__.__name__,
            len(self),
            self.max_images,
            self._result is not None,
        )

    @property
    def result(self) -> Optional[CompositeResult]:
        """Last merged result, or ``None`` if the photos changed since."""
        return self._result

    @property
    def is_full(self) -> bool:
        """Whether no more photos can be added."""
        return len(self) >= self.max_images

    @property
    def can_merge(self) -> bool:
        """Whether enough photos are selected to merge."""
        return len(self) >= self.min_images

    def add(self, *photos: ImageSource) -> None:
        """
        Append photos to the end of the selection.

        The whole batch is rejected if it does not fit.

        :raise TooManyImagesError: if the selection would exceed
            ``max_images``.
        """
        if len(self) + len(photos) > self.max_images:
            raise TooManyImagesError(f"Maximum {self.max_images} photos allowed")
        for photo in photos:
            if not isinstance(photo, ImageSource):
                raise TypeError(f"Expected ImageSource, got {type(photo).__name__}")
        self._photos.extend(photos)
        self._invalidate()

    def remove(self, index: int) -> ImageSource:
        """Remove and return the photo at ``index``."""
        photo = self._photos.pop(index)
        self._invalidate()
        return photo

    def move(self, index: int, new_index: int) -> None:
        """Move the photo at ``index`` to ``new_index``."""
        index = range(len(self))[index]
        new_index = range(len(self))[new_index]
        photo = self._photos.pop(index)
        self._photos.insert(new_index, photo)
        self._invalidate()

    def clear(self) -> None:
        self._photos.clear()
        self._invalidate()

    def merge(self, **kwargs: Any) -> CompositeResult:
        """
        Compose the current photos left to right.

        Keyword arguments are passed to :py:func:`~kondipress.compositor.compose`.

        :raise TooFewImagesError: if fewer than ``min_images`` photos are
            selected.
        :return: :py:class:`~kondipress.compositor.CompositeResult`
        """
        if not self.can_merge:
            raise TooFewImagesError(f"Please upload at least {self.min_images} photos")
        self._result = compose(list(self._photos), **kwargs)
        logger.info("Merged %d photos into %dx%d" % ((len(self),) + self._result.size))
        return self._result

    def save(self, fp: Union[BinaryIO, str, os.PathLike]) -> None:
        """
        Write the merged result.

        :raise NoResultError: if nothing has been merged since the last
            change.
        """
        if self._result is None:
            raise NoResultError("Nothing to save, merge the photos first")
        self._result.save(fp)

    def _invalidate(self) -> None:
        if self._result is not None:
            logger.debug("Photos changed, discarding merged result")
        self._result = None
