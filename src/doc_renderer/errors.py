"""Typed exception hierarchy for document renderer errors.

This module defines all custom exceptions used by the renderer library.
All exceptions inherit from RendererError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.postman_client.errors import SyncError


class RendererError(SyncError):
    """Base exception for all renderer errors."""
    pass


class PathConflictError(RendererError):
    """Raised when a path that must be a directory exists as a plain file."""

    def __init__(self, path: str):
        super().__init__(f"Output path {path} is a file, expected a directory")
        self.path = path


class FilesystemError(RendererError):
    """Raised when filesystem operations fail (write, delete, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class CollectionFormatError(RendererError):
    """Raised when collection JSON does not have the expected structure."""

    def __init__(self, location: str, message: str):
        super().__init__(f"Invalid collection data at {location}: {message}")
        self.location = location
        self.message = message
