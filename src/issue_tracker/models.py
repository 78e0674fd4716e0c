"""Data models for issue reconciliation.

This module defines the diff entry, tracked issue and reconciliation result
models. Raw GitLab API dictionaries are converted at the boundary through
the ``from_api`` constructors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class ChangeKind(Enum):
    """How a file changed in a commit."""
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    MODIFIED = "modified"


class ReconcileAction(Enum):
    """Branch of the reconciliation table taken for one diff entry.

    - CREATED: A new issue was opened for the path
    - COMMENTED: A diff note was added (plus reopen/unlabel when needed)
    - DELETE_LABELED: The delete label was added (plus reopen when closed)
    - DELETE_COMMENTED: The path was deleted again, a note was added
    - SKIPPED: Nothing to do (not a document, or deleted without issue)
    - UNSUPPORTED: Renamed entry, logged and ignored
    """
    CREATED = "created"
    COMMENTED = "commented"
    DELETE_LABELED = "delete_labeled"
    DELETE_COMMENTED = "delete_commented"
    SKIPPED = "skipped"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class DiffEntry:
    """One file's change record in a commit diff.

    Attributes:
        new_path: Path after the change (same as old_path for deletions)
        diff: Unified diff text
        old_path: Path before the change
        new_file: The file was added
        deleted_file: The file was deleted
        renamed_file: The file was renamed
    """
    new_path: str
    diff: str = ""
    old_path: str = ""
    new_file: bool = False
    deleted_file: bool = False
    renamed_file: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'DiffEntry':
        """Build an entry from a GitLab commit diff record."""
        new_path = data.get('new_path') or data.get('old_path') or ''
        return cls(
            new_path=new_path,
            diff=data.get('diff') or '',
            old_path=data.get('old_path') or new_path,
            new_file=bool(data.get('new_file')),
            deleted_file=bool(data.get('deleted_file')),
            renamed_file=bool(data.get('renamed_file')),
        )


@dataclass(frozen=True)
class TrackedIssue:
    """A tracker issue standing for one documentation path.

    Attributes:
        iid: Project-scoped issue number
        title: Issue title, which is the document path
        state: "opened" or "closed"
        closed_at: Timestamp of closing (None while open)
        labels: Labels on the issue
        web_url: Browser URL of the issue
    """
    iid: int
    title: str
    state: str = "opened"
    closed_at: Optional[str] = None
    labels: FrozenSet[str] = frozenset()
    web_url: str = ""

    @property
    def path(self) -> str:
        return self.title

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None or self.state == "closed"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'TrackedIssue':
        """Build an issue from a GitLab issue record."""
        return cls(
            iid=int(data['iid']),
            title=data.get('title') or '',
            state=data.get('state') or 'opened',
            closed_at=data.get('closed_at'),
            labels=frozenset(data.get('labels') or []),
            web_url=data.get('web_url') or '',
        )


@dataclass
class ReconcileSummary:
    """Outcome of reconciling a whole change feed.

    Attributes:
        pages: Number of non-empty diff pages consumed
        entries: Number of diff entries processed
        actions: Count of entries per ReconcileAction
    """
    pages: int = 0
    entries: int = 0
    actions: Dict[ReconcileAction, int] = field(default_factory=dict)

    def record(self, action: ReconcileAction) -> None:
        self.entries += 1
        self.actions[action] = self.actions.get(action, 0) + 1

    def count(self, action: ReconcileAction) -> int:
        return self.actions.get(action, 0)

    def merge(self, other: 'ReconcileSummary') -> None:
        """Add the counts of another run to this one."""
        self.pages += other.pages
        self.entries += other.entries
        for action, count in other.actions.items():
            self.actions[action] = self.actions.get(action, 0) + count
