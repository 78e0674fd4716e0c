"""Issue tracker reconciliation for documentation changes.

This package pages through a commit's diff on GitLab and keeps exactly one
tracker issue per changed documentation path in the right state.
"""

from .change_classifier import classify
from .change_feed import ChangeFeedPager
from .errors import (
    TrackerError,
    TrackerRequestError,
    TrackerMutationError,
    UnclassifiedDiffError,
)
from .gitlab_client import GitLabClient
from .issue_index import IssueIndex
from .models import ChangeKind, DiffEntry, ReconcileAction, ReconcileSummary, TrackedIssue
from .reconciler import IssueReconciler

__all__ = [
    'classify',
    'ChangeFeedPager',
    'TrackerError',
    'TrackerRequestError',
    'TrackerMutationError',
    'UnclassifiedDiffError',
    'GitLabClient',
    'IssueIndex',
    'ChangeKind',
    'DiffEntry',
    'ReconcileAction',
    'ReconcileSummary',
    'TrackedIssue',
    'IssueReconciler',
]
