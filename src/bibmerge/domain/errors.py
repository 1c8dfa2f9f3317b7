"""Errors raised while running a merge batch."""

from __future__ import annotations


class BatchError(RuntimeError):
    """Base class for batch merge errors."""


class UserNotFound(BatchError):
    """Raised when the attribution borrowernumber does not resolve to a patron."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"Borrowernumber {user_id} not found in database.")
        self.user_id = user_id


class InputFileError(BatchError):
    """Raised when the input file cannot be opened or parsed."""


class GroupError(BatchError):
    """A single merge group could not be merged; the batch carries on."""

    def __init__(self, message: str, *, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class SkippedGroup(GroupError):
    """Too few usable identifiers, or no child record exists."""


class RejectedGroup(GroupError):
    """The master record does not exist."""


class MergeFailure(GroupError):
    """The catalog refused the merge or raised while performing it."""
