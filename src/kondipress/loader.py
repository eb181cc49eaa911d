"""Concurrent image decoding.

Each input is decoded independently on a thread pool. :py:func:`load_images`
returns only once every decode has finished, so the caller gets a complete
set of sizes before any layout is computed.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, Optional, Sequence, Union

from kondipress.source import ImageSource

logger = logging.getLogger(__name__)

ImageFile = Union[BinaryIO, str, bytes, os.PathLike]


def load_images(
    files: Sequence[ImageFile], max_workers: Optional[int] = None
) -> list[ImageSource]:
    """
    Decode images concurrently and join on all of them.

    Args:
        files: filenames, raw bytes, or file-like objects
        max_workers: size of the thread pool, defaults to one thread per file

    Returns:
        :py:class:`~kondipress.source.ImageSource` list in the order of
        ``files``, regardless of which decode completed first

    Raises:
        InvalidImageError: if any input fails to decode, after all decodes
            have finished
        OSError: if a file cannot be read
    """
    files = list(files)
    if not files:
        return []
    max_workers = max_workers or len(files)
    logger.debug("Decoding %d file(s) with %d worker(s)" % (len(files), max_workers))

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(ImageSource.open, fp) for fp in files]

    sources = []
    errors = []
    for index, future in enumerate(futures):
        error = future.exception()
        if error is None:
            sources.append(future.result())
        else:
            logger.debug("Decode %d failed: %s" % (index, error))
            errors.append(error)
    if errors:
        raise errors[0]
    return sources
