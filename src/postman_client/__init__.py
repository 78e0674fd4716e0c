"""Postman client library for the documentation export.

This package provides Python abstractions over the Postman REST API,
enabling clean and type-safe retrieval of workspaces and collections.
"""

from .errors import (
    SyncError,
    PostmanError,
    InvalidCredentialsError,
    APIUnreachableError,
    FetchError,
)

__all__ = [
    "SyncError",
    "PostmanError",
    "InvalidCredentialsError",
    "APIUnreachableError",
    "FetchError",
]
