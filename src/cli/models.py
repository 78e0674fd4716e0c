"""Data models for CLI operations.

This module defines the run configuration and result models used by the
CLI module. All models use dataclasses for clean, type-safe data
structures; the configuration is frozen so that it can be shared by every
component of a run without being modified.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

from src.issue_tracker.change_feed import DEFAULT_PER_PAGE
from src.issue_tracker.gitlab_client import DEFAULT_REQUEST_DELAY
from src.issue_tracker.models import ReconcileSummary
from src.issue_tracker.reconciler import (
    DEFAULT_COLLECTION_LABEL_PREFIX,
    DEFAULT_CREATE_LABEL,
    DEFAULT_DELETE_LABEL,
)

DEFAULT_COMMIT_MESSAGE = "Update API documentation"


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Export and reconciliation completed
    - GENERAL_ERROR (1): Config, filesystem, git or collection errors
    - TRACKER_ERROR (2): The issue tracker rejected a request
    - AUTH_ERROR (3): Missing or rejected credentials
    - NETWORK_ERROR (4): The collection source could not be reached

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    TRACKER_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass(frozen=True)
class GitSettings:
    """Version control settings of the output directory.

    Attributes:
        remote: Remote to push to
        branch: Branch to push (None pushes the current branch)
        push: Whether to push after committing
        commit_message: Message of the export commit
    """
    remote: str = "origin"
    branch: Optional[str] = None
    push: bool = True
    commit_message: str = DEFAULT_COMMIT_MESSAGE


@dataclass(frozen=True)
class TrackerSettings:
    """GitLab project the documentation issues live in.

    Attributes:
        project_id: Numeric id or "group/project" path
        gitlab_url: GitLab instance URL
        request_delay: Seconds waited before every GitLab request
        per_page: Diff entries fetched per page
        create_label: Label of newly created issues
        delete_label: Soft-delete marker label
        collection_label_prefix: Prefix of the per-collection label
    """
    project_id: str
    gitlab_url: str = "https://gitlab.com"
    request_delay: float = DEFAULT_REQUEST_DELAY
    per_page: int = DEFAULT_PER_PAGE
    create_label: str = DEFAULT_CREATE_LABEL
    delete_label: str = DEFAULT_DELETE_LABEL
    collection_label_prefix: str = DEFAULT_COLLECTION_LABEL_PREFIX


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration of one export run.

    Built once by ConfigLoader from the YAML file, the environment and the
    command line, then passed to every component.

    Attributes:
        output_dir: Git working copy the documentation is written to
        workspace_id: Postman workspace to export
        collections: Collection uids to export (empty exports all)
        save_raw_json: Keep workspace.json / collection.json snapshots
        git: Version control settings
        tracker: Issue tracker settings (None when issues are skipped)
        postman_api_key: Postman API key
        gitlab_token: GitLab access token
    """
    output_dir: str
    workspace_id: str
    collections: Tuple[str, ...] = ()
    save_raw_json: bool = True
    git: GitSettings = field(default_factory=GitSettings)
    tracker: Optional[TrackerSettings] = None
    postman_api_key: str = field(default="", repr=False)
    gitlab_token: str = field(default="", repr=False)


@dataclass
class ExportSummary:
    """Summary of an export run for display to the user.

    Attributes:
        exported_collections: Names of the collections rendered
        skipped_collections: Names of the collections filtered out
        documents_written: Number of Markdown files written
        committed: Whether the export produced a commit
        commit_ids: Commits whose diffs were reconciled, oldest first
        reconcile: Reconciliation counts (None when not run)
    """
    exported_collections: list = field(default_factory=list)
    skipped_collections: list = field(default_factory=list)
    documents_written: int = 0
    committed: bool = False
    commit_ids: list = field(default_factory=list)
    reconcile: Optional[ReconcileSummary] = None
