"""Lookup of the tracker issue standing for a document path."""

import logging
from typing import Optional

from .gitlab_client import GitLabClient
from .models import TrackedIssue

logger = logging.getLogger(__name__)


class IssueIndex:
    """Finds issues by document path through the tracker's search.

    The search is a keyword match, not an exact key lookup: when the tracker
    returns several issues the first one is used. Nothing is cached; every
    lookup queries the tracker again.
    """

    def __init__(self, tracker: GitLabClient):
        self._tracker = tracker

    def find_by_path(self, path: str) -> Optional[TrackedIssue]:
        """Return the first issue matching a path, or None.

        Raises:
            TrackerRequestError: If the search request fails
        """
        results = self._tracker.search_issues(path)
        if not results:
            logger.debug(f"No issue found for {path}")
            return None

        if len(results) > 1:
            logger.debug(f"{len(results)} issues match {path}, using the first")

        return TrackedIssue.from_api(results[0])
