"""Diff-driven reconciliation of documentation changes with tracker issues.

This module keeps one tracker issue per documentation path. For every entry
of a commit diff it looks the path up in the tracker and applies the
transition below. No state is stored between runs; it is re-derived from the
tracker's search on every entry.

    Change     Issue   Closed  Labeled delete  Action
    ---------  ------  ------  --------------  ---------------------------------
    added      no                              create (labels create, collection:X)
    added      yes                             same as modified
    deleted    no                              nothing
    deleted    yes             yes             note "deleted again"
    deleted    yes             no              add delete label, reopen if closed
    modified   no                              create
    modified   yes     *       *               diff note, reopen if closed,
                                               remove delete label if present
    renamed                                    warning only

The issue is a soft marker that a document needs attention: issues are never
deleted, the delete label lets a person confirm a removal, and a document
that comes back clears the label again.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .change_classifier import classify
from .errors import TrackerMutationError, UnclassifiedDiffError
from .gitlab_client import GitLabClient
from .issue_index import IssueIndex
from .models import ChangeKind, DiffEntry, ReconcileAction, ReconcileSummary, TrackedIssue

logger = logging.getLogger(__name__)

DEFAULT_CREATE_LABEL = "create"
DEFAULT_DELETE_LABEL = "delete"
DEFAULT_COLLECTION_LABEL_PREFIX = "collection:"

# Only rendered documents are tracked, raw JSON snapshots are not
DOCUMENT_SUFFIX = ".md"


def diff_note(commit: str, entry: DiffEntry) -> str:
    """Render a commit diff as a collapsible Markdown block.

    Args:
        commit: Commit SHA the diff belongs to
        entry: Diff entry to render

    Returns:
        Markdown with the commit id and a ``<details>`` block holding the diff
    """
    fence = "```"
    while fence in entry.diff:
        fence += "`"

    return (
        f"Commit: {commit}\n\n"
        f"<details>\n"
        f"<summary>Diff of {entry.new_path}</summary>\n\n"
        f"{fence}diff\n"
        f"{entry.diff.rstrip()}\n"
        f"{fence}\n\n"
        f"</details>\n"
    )


def collection_of(path: str) -> str:
    """Top-level directory of a document path, i.e. its collection name."""
    return path.split('/', 1)[0]


class IssueReconciler:
    """Applies the issue transition required by each diff entry.

    Entries are handled strictly one after the other since search followed by
    mutation is not atomic. Each handled entry costs at most two mutation
    calls and logs one line naming the action and the issue URL.

    Example:
        >>> client = GitLabClient("https://gitlab.com", token, project_id=42)
        >>> reconciler = IssueReconciler(client, IssueIndex(client))
        >>> summary = reconciler.reconcile_feed(ChangeFeedPager(client).pages(sha), sha)
    """

    def __init__(
        self,
        tracker: GitLabClient,
        index: IssueIndex,
        create_label: str = DEFAULT_CREATE_LABEL,
        delete_label: str = DEFAULT_DELETE_LABEL,
        collection_label_prefix: str = DEFAULT_COLLECTION_LABEL_PREFIX,
    ):
        """Initialize the reconciler.

        Args:
            tracker: Tracker receiving the mutations
            index: Path lookup against the same tracker
            create_label: Label put on newly created issues
            delete_label: Soft-delete marker label
            collection_label_prefix: Prefix of the per-collection label
        """
        self._tracker = tracker
        self._index = index
        self.create_label = create_label
        self.delete_label = delete_label
        self.collection_label_prefix = collection_label_prefix

    def reconcile_feed(
        self,
        pages: Iterable[List[DiffEntry]],
        commit: str
    ) -> ReconcileSummary:
        """Reconcile every entry of a paged change feed.

        Each page is fully processed, in order, before the next one is
        requested.

        Args:
            pages: Pages of diff entries (e.g. ChangeFeedPager.pages(commit))
            commit: Commit the entries belong to

        Returns:
            Counts of the actions taken

        Raises:
            TrackerMutationError: On the first rejected mutation
            TrackerRequestError: If a search or page request fails
        """
        summary = ReconcileSummary()

        for page in pages:
            summary.pages += 1
            for entry in page:
                try:
                    action = self.reconcile(entry, commit)
                except UnclassifiedDiffError as e:
                    logger.warning(str(e))
                    action = ReconcileAction.UNSUPPORTED
                summary.record(action)

        logger.info(
            f"Reconciled {summary.entries} entr(ies) from {summary.pages} page(s) "
            f"of commit {commit[:8]}"
        )
        return summary

    def reconcile(self, entry: DiffEntry, commit: str) -> ReconcileAction:
        """Reconcile a single diff entry.

        Args:
            entry: Diff entry
            commit: Commit the entry belongs to

        Returns:
            The action taken

        Raises:
            UnclassifiedDiffError: If the entry is a rename
            TrackerMutationError: If the tracker rejects a mutation
            TrackerRequestError: If the issue search fails
        """
        path = entry.new_path
        if not path.endswith(DOCUMENT_SUFFIX):
            logger.debug(f"Skipping {path}: not a document")
            return ReconcileAction.SKIPPED

        kind = classify(entry)
        if kind is ChangeKind.RENAMED:
            raise UnclassifiedDiffError(entry.old_path, path)

        issue = self._index.find_by_path(path)

        try:
            if kind is ChangeKind.DELETED:
                return self._deleted(entry, issue, commit)

            # Added and modified only differ when there is no issue yet
            if issue is None:
                return self._create(entry, commit)
            return self._modified(entry, issue, commit)

        except TrackerMutationError as e:
            if e.path is not None:
                raise
            raise TrackerMutationError(
                operation=e.operation,
                reason=e.reason,
                status_code=e.status_code,
                path=path,
                commit=commit,
            ) from e

    def _create(self, entry: DiffEntry, commit: str) -> ReconcileAction:
        labels = [
            self.create_label,
            f"{self.collection_label_prefix}{collection_of(entry.new_path)}",
        ]
        created = self._tracker.create_issue(
            title=entry.new_path,
            labels=labels,
            description=diff_note(commit, entry),
        )
        logger.info(f"Created issue for {entry.new_path}: {_url(created)}")
        return ReconcileAction.CREATED

    def _modified(self, entry: DiffEntry, issue: TrackedIssue, commit: str) -> ReconcileAction:
        self._tracker.add_note(issue.iid, f"Document changed.\n\n{diff_note(commit, entry)}")

        fields: Dict[str, Any] = {}
        if issue.is_closed:
            fields['state_event'] = 'reopen'
        if self.delete_label in issue.labels:
            fields['remove_labels'] = self.delete_label

        if fields:
            self._tracker.update_issue(issue.iid, **fields)
            logger.info(
                f"Commented on and restored issue for {entry.new_path} "
                f"({', '.join(sorted(fields))}): {issue.web_url}"
            )
        else:
            logger.info(f"Commented on issue for {entry.new_path}: {issue.web_url}")

        return ReconcileAction.COMMENTED

    def _deleted(
        self,
        entry: DiffEntry,
        issue: Optional[TrackedIssue],
        commit: str
    ) -> ReconcileAction:
        if issue is None:
            logger.debug(f"Deleted {entry.new_path} has no issue, nothing to do")
            return ReconcileAction.SKIPPED

        if self.delete_label in issue.labels:
            self._tracker.add_note(issue.iid, f"Document deleted again in commit {commit}.")
            logger.info(f"Commented on deleted issue for {entry.new_path}: {issue.web_url}")
            return ReconcileAction.DELETE_COMMENTED

        fields: Dict[str, Any] = {'add_labels': self.delete_label}
        if issue.is_closed:
            fields['state_event'] = 'reopen'

        self._tracker.update_issue(issue.iid, **fields)
        logger.info(
            f"Marked issue for {entry.new_path} as deleted"
            f"{' and reopened it' if issue.is_closed else ''}: {issue.web_url}"
        )
        return ReconcileAction.DELETE_LABELED


def _url(record: Any) -> str:
    if isinstance(record, dict):
        return record.get('web_url') or f"#{record.get('iid', '?')}"
    return ''
