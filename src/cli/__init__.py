"""Command-line interface for the Postman documentation export.

This package provides the `postman-docs-sync` CLI tool that exports Postman
collections into a Markdown tree, commits it, and reconciles the resulting
changes with GitLab issues, with progress indication and error handling.
"""

from .export_command import ExportCommand
from .models import ExitCode, RunConfig, GitSettings, TrackerSettings, ExportSummary
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'ExportCommand',
    'ExitCode',
    'RunConfig',
    'GitSettings',
    'TrackerSettings',
    'ExportSummary',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
