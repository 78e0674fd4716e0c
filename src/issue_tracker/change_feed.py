"""Paging through the diff of a commit."""

import logging
from typing import Iterator, List

from .gitlab_client import GitLabClient
from .models import DiffEntry

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 20


class ChangeFeedPager:
    """Yields a commit's diff one page at a time.

    Pages are requested lazily starting at page 1; the feed ends at the
    first empty page. A generator returned by ``pages`` cannot be restarted.

    Example:
        >>> pager = ChangeFeedPager(gitlab_client)
        >>> for page in pager.pages("3f2a..."):
        ...     for entry in page:
        ...         print(entry.new_path)
    """

    def __init__(self, source: GitLabClient, per_page: int = DEFAULT_PER_PAGE):
        self._source = source
        self._per_page = per_page

    def pages(self, commit: str) -> Iterator[List[DiffEntry]]:
        """Iterate over the diff pages of a commit.

        Args:
            commit: Commit SHA

        Yields:
            The entries of each non-empty page, in order

        Raises:
            TrackerRequestError: If a page cannot be fetched
        """
        page = 1
        while True:
            records = self._source.commit_diff_page(commit, page, self._per_page)
            if not records:
                logger.debug(f"Diff of {commit[:8]} ends after {page - 1} page(s)")
                return

            logger.debug(f"Diff of {commit[:8]}: page {page} with {len(records)} entr(ies)")
            yield [DiffEntry.from_api(record) for record in records]
            page += 1
