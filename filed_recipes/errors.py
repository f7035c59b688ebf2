"""
Exception types raised by the recipe codec and repository.

All of them derive from RecipeRepositoryError so callers can catch one type
at the boundary and decide whether to log and continue or to propagate.
"""

from typing import Optional


class RecipeRepositoryError(Exception):
    """Base class for every failure raised by this package."""


class FormatError(RecipeRepositoryError):
    """
    The recipe file could not be parsed.

    Attributes:
        line_number: 1-based line number of the offending row (None if unknown)
        line: The offending row without its line terminator
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} (line {line_number}: {line!r})"
        super().__init__(message)


class RangeError(RecipeRepositoryError, IndexError):
    """An index was outside the bounds of the recipe collection."""


class NotFoundError(RecipeRepositoryError, LookupError):
    """No stored recipe matched the one given for deletion."""


class StorageError(RecipeRepositoryError):
    """The recipe file could not be opened, read or written."""
