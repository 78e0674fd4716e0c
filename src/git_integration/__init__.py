"""Git integration for the documentation export.

This package commits and pushes the rendered documentation tree and reports
the commit whose diff drives issue reconciliation.
"""

from src.git_integration.errors import GitRepositoryError
from src.git_integration.git_repository import GitRepository

__all__ = [
    'GitRepositoryError',
    'GitRepository',
]
