"""
Exception hierarchy for kondipress.
"""


class KondipressError(Exception):
    """Base class of all kondipress errors."""


class InvalidImageError(KondipressError, ValueError):
    """
    An input image cannot be composed: it failed to decode, or its width or
    height is not a positive number.
    """


class EmptyInputError(KondipressError, ValueError):
    """No images were supplied."""


class SelectionError(KondipressError):
    """The photo selection does not satisfy the merge policy."""


class TooManyImagesError(SelectionError):
    """Adding photos would exceed the selection limit."""


class TooFewImagesError(SelectionError):
    """Not enough photos are selected to merge."""


class NoResultError(SelectionError):
    """There is no merged result to save."""


class OutputTooLargeError(KondipressError, ValueError):
    """The composite would exceed the maximum size of the output encoding."""
