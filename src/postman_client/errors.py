"""Typed exception hierarchy for Postman-related errors.

This module defines the root of the application's exception hierarchy and
the errors raised by the Postman collection source client. All exceptions
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all postman-docs-sync errors.

    Use this to catch any application-level error from the export tool.
    """
    pass


class PostmanError(SyncError):
    """Base exception for all Postman-related errors."""
    pass


class InvalidCredentialsError(PostmanError):
    """Raised when API credentials are missing or rejected."""

    def __init__(self, credential: str, endpoint: str):
        super().__init__(
            f"API credential is missing or invalid ({credential}, endpoint: {endpoint})"
        )
        self.credential = credential
        self.endpoint = endpoint


class APIUnreachableError(PostmanError):
    """Raised when the Postman API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class FetchError(PostmanError):
    """Raised when a workspace or collection cannot be fetched or is malformed.

    Attributes:
        resource: API resource that was requested (e.g. "collections/123-abc")
        reason: What was wrong with the response
        saved_to: Path where the raw response was written, if any
    """

    def __init__(self, resource: str, reason: str, saved_to: Optional[str] = None):
        message = f"Failed to fetch {resource}: {reason}"
        if saved_to:
            message += f" (see {saved_to})"
        super().__init__(message)
        self.resource = resource
        self.reason = reason
        self.saved_to = saved_to
