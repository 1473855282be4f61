"""Exception types raised by SearchAssembler."""

from __future__ import annotations


class SearchAssemblerError(Exception):
    """Base class for all SearchAssembler errors."""


class InvalidArgumentError(SearchAssemblerError, ValueError):
    """Raised when an operation receives an argument outside its domain."""


class UnbalancedGroupingError(SearchAssemblerError, ValueError):
    """Raised by ``QueryBuilder.build`` when groups are not balanced.

    Attributes:
        depth: Net group depth at build time. Positive means unclosed groups,
            negative means more groups were closed than opened.
    """

    def __init__(self, depth: int) -> None:
        self.depth = depth
        if depth > 0:
            detail = f"{depth} group(s) left open"
        else:
            detail = f"{-depth} group(s) closed without being opened"
        super().__init__(f"Unbalanced query grouping: {detail}")


class BuilderFinalizedError(SearchAssemblerError, RuntimeError):
    """Raised when a builder is used after ``build`` consumed it."""


class TransientIndexError(SearchAssemblerError):
    """Raised by an index back-end for a failure that may succeed on retry."""


class IndexOperationError(SearchAssemblerError):
    """Raised when an index operation still fails after all retries."""
