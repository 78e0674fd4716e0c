"""API wrapper for the GitLab REST API v4.

This module wraps a requests session for one GitLab project and provides
the issue operations and the commit diff pages used by reconciliation.
Every call is preceded by a fixed courtesy delay to stay under the
instance's rate limit; nothing is retried.
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Union
from urllib.parse import quote

import requests
from requests.exceptions import ConnectionError, ConnectTimeout, ReadTimeout, Timeout

from .errors import TrackerMutationError, TrackerRequestError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30

DEFAULT_REQUEST_DELAY = 1.0


class GitLabClient:
    """Issue tracker and diff source backed by a GitLab project.

    Reads raise TrackerRequestError and mutations raise TrackerMutationError
    on any non-success response.

    Example:
        >>> client = GitLabClient("https://gitlab.com", token, project_id=42)
        >>> issues = client.search_issues("API/Ping.md")
        >>> client.add_note(issues[0]["iid"], "Changed again")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        project_id: Union[int, str],
        request_delay: float = DEFAULT_REQUEST_DELAY,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: GitLab instance URL (e.g. https://gitlab.com)
            token: Access token sent as PRIVATE-TOKEN
            project_id: Numeric id or "group/project" path of the project
            request_delay: Seconds to wait before each request
            session: Optional pre-built session (used by tests)
        """
        project = quote(str(project_id), safe='')
        self._project_url = f"{base_url.rstrip('/')}/api/v4/projects/{project}"
        self._request_delay = request_delay
        self._session = session or requests.Session()
        self._session.headers.update({'PRIVATE-TOKEN': token})

    def search_issues(self, query: str) -> List[Dict[str, Any]]:
        """Search project issues by title keywords.

        Args:
            query: Search text

        Returns:
            Matching issue records, most recently created first
        """
        return self._request(
            'GET',
            '/issues',
            params={'search': query, 'in': 'title'},
        )

    def create_issue(
        self,
        title: str,
        labels: Iterable[str],
        description: str
    ) -> Dict[str, Any]:
        """Open a new issue.

        Args:
            title: Issue title
            labels: Labels to attach
            description: Issue body (Markdown)

        Returns:
            The created issue record
        """
        return self._request(
            'POST',
            '/issues',
            json={
                'title': title,
                'labels': ','.join(labels),
                'description': description,
            },
            mutation=True,
        )

    def add_note(self, iid: int, body: str) -> Dict[str, Any]:
        """Add a comment to an issue."""
        return self._request(
            'POST',
            f'/issues/{iid}/notes',
            json={'body': body},
            mutation=True,
        )

    def update_issue(self, iid: int, **fields: Any) -> Dict[str, Any]:
        """Change state or labels of an issue.

        Args:
            iid: Issue number
            **fields: GitLab update fields such as ``state_event``,
                ``add_labels`` or ``remove_labels``

        Returns:
            The updated issue record
        """
        return self._request(
            'PUT',
            f'/issues/{iid}',
            json=fields,
            mutation=True,
        )

    def commit_diff_page(self, commit: str, page: int, per_page: int = 20) -> List[Dict[str, Any]]:
        """Fetch one page of a commit's diff.

        Args:
            commit: Commit SHA
            page: 1-based page number
            per_page: Entries per page

        Returns:
            Diff records of the page (empty past the last page)
        """
        return self._request(
            'GET',
            f'/repository/commits/{commit}/diff',
            params={'page': page, 'per_page': per_page},
        )

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        mutation: bool = False,
    ) -> Any:
        """Send a request to the project API and decode the JSON response.

        Args:
            method: HTTP method
            path: Path relative to the project URL
            params: Query parameters
            json: JSON body
            mutation: Whether failures raise TrackerMutationError

        Returns:
            Decoded JSON response
        """
        operation = f"{method} {path}"
        error_cls = TrackerMutationError if mutation else TrackerRequestError

        time.sleep(self._request_delay)
        logger.debug(f"GitLab API: {operation}")

        try:
            response = self._session.request(
                method,
                f"{self._project_url}{path}",
                params=params,
                json=json,
                timeout=REQUEST_TIMEOUT,
            )
        except (Timeout, ConnectTimeout, ReadTimeout, ConnectionError) as e:
            raise error_cls(operation, f"GitLab unreachable ({e.__class__.__name__})")
        except requests.RequestException as e:
            raise error_cls(operation, str(e))

        if not response.ok:
            raise error_cls(operation, _error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            raise error_cls(operation, "response is not valid JSON", status_code=response.status_code)


def _error_message(response: requests.Response) -> str:
    """Extract GitLab's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or response.reason or "").strip()[:300]

    if isinstance(body, dict):
        message = body.get('message') or body.get('error')
        if message:
            return str(message)
    return str(body)[:300]
