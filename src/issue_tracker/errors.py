"""Typed exception hierarchy for issue tracker errors.

This module defines all custom exceptions used by the issue tracker library.
All exceptions inherit from TrackerError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.postman_client.errors import SyncError


class TrackerError(SyncError):
    """Base exception for all issue tracker errors."""
    pass


class TrackerRequestError(TrackerError):
    """Raised when a read from the tracker (search, commit diff) fails.

    Attributes:
        operation: Description of the request (e.g. "GET /issues")
        reason: Error description
        status_code: HTTP status, if a response was received
    """

    def __init__(self, operation: str, reason: str, status_code: Optional[int] = None):
        message = f"Tracker request {operation} failed"
        if status_code is not None:
            message += f" with HTTP {status_code}"
        message += f": {reason}"
        super().__init__(message)
        self.operation = operation
        self.reason = reason
        self.status_code = status_code


class TrackerMutationError(TrackerError):
    """Raised when the tracker rejects an issue mutation.

    The reconciler adds the document path and commit id that triggered the
    mutation before the error reaches the top level.

    Attributes:
        operation: Description of the request (e.g. "POST /issues")
        reason: Error description
        status_code: HTTP status, if a response was received
        path: Document path being reconciled
        commit: Commit id being reconciled
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        status_code: Optional[int] = None,
        path: Optional[str] = None,
        commit: Optional[str] = None,
    ):
        message = f"Tracker mutation {operation} failed"
        if status_code is not None:
            message += f" with HTTP {status_code}"
        message += f": {reason}"
        if path:
            message += f" (path: {path}"
            message += f", commit: {commit})" if commit else ")"
        super().__init__(message)
        self.operation = operation
        self.reason = reason
        self.status_code = status_code
        self.path = path
        self.commit = commit


class UnclassifiedDiffError(TrackerError):
    """Raised for diff entries the reconciler does not act upon (renames).

    This error is not fatal: the entry is logged as a warning and skipped.
    """

    def __init__(self, old_path: str, new_path: str):
        super().__init__(
            f"Unsupported rename of {old_path} to {new_path}, no issue updated"
        )
        self.old_path = old_path
        self.new_path = new_path
