"""API wrapper for the Postman REST API.

This module wraps a requests session for the Postman API and provides
error translation from HTTP exceptions to our typed exception hierarchy.
It validates the shape of workspace and collection responses before the
rest of the tool sees them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

import requests
from requests.exceptions import ConnectionError, ConnectTimeout, ReadTimeout, Timeout

from .auth import POSTMAN_API_URL
from .errors import APIUnreachableError, FetchError, InvalidCredentialsError

logger = logging.getLogger(__name__)

# Only this collection format is understood by the renderer
COLLECTION_SCHEMA_V21 = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"

REQUEST_TIMEOUT = 30


class CollectionSummary(NamedTuple):
    """A collection entry as listed by a workspace."""
    uid: str
    name: str


class PostmanClient:
    """Wrapper around the Postman API with error translation.

    This class provides a thin wrapper over the Postman API that:
    1. Authenticates every request with the X-API-Key header
    2. Translates HTTP errors to typed exceptions
    3. Optionally keeps a copy of each raw response on disk
    4. Validates workspace and collection payloads

    Example:
        >>> client = PostmanClient(api_key="PMAK-...")
        >>> collections = client.get_workspace("1f0df51a-...")
        >>> data = client.get_collection(collections[0].uid)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = POSTMAN_API_URL,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the API wrapper.

        Args:
            api_key: Postman API key
            base_url: Postman API base URL
            session: Optional pre-built session (used by tests)
        """
        self._base_url = base_url.rstrip('/')
        self._session = session or requests.Session()
        self._session.headers.update({'X-API-Key': api_key})

    def get_workspace(
        self,
        workspace_id: str,
        save_to: Optional[Path] = None
    ) -> List[CollectionSummary]:
        """List the collections of a workspace.

        Args:
            workspace_id: Postman workspace ID
            save_to: Optional path to write the raw response to

        Returns:
            Collections of the workspace in API order

        Raises:
            FetchError: If the response has no workspace data
            InvalidCredentialsError: If the API key is rejected
            APIUnreachableError: If the API cannot be reached
        """
        resource = f"workspaces/{workspace_id}"
        data = self._get_json(resource, save_to)

        workspace = data.get('workspace') if isinstance(data, dict) else None
        if not isinstance(workspace, dict):
            raise FetchError(
                resource,
                "response has no workspace data",
                saved_to=str(save_to) if save_to else None
            )

        logger.info(f"Workspace {workspace_id} downloaded")
        summaries = []
        for entry in workspace.get('collections') or []:
            uid = entry.get('uid') if isinstance(entry, dict) else None
            name = entry.get('name') if isinstance(entry, dict) else None
            if not uid or not name:
                raise FetchError(
                    resource,
                    f"collection entry without uid or name: {entry!r}",
                    saved_to=str(save_to) if save_to else None
                )
            summaries.append(CollectionSummary(uid=uid, name=name))
        return summaries

    def get_collection(self, uid: str, save_to: Optional[Path] = None) -> Dict[str, Any]:
        """Fetch a collection and check its format version.

        Args:
            uid: Collection uid
            save_to: Optional path to write the raw response to

        Returns:
            The ``collection`` object of the response

        Raises:
            FetchError: If the schema tag is not Postman collection v2.1.0
            InvalidCredentialsError: If the API key is rejected
            APIUnreachableError: If the API cannot be reached
        """
        resource = f"collections/{uid}"
        data = self._get_json(resource, save_to)

        collection = data.get('collection') if isinstance(data, dict) else None
        schema = None
        if isinstance(collection, dict):
            schema = (collection.get('info') or {}).get('schema')

        if schema != COLLECTION_SCHEMA_V21:
            raise FetchError(
                resource,
                f"unexpected collection schema {schema!r}",
                saved_to=str(save_to) if save_to else None
            )

        logger.info(f"Collection {uid} downloaded")
        return collection

    def _get_json(self, resource: str, save_to: Optional[Path]) -> Any:
        """GET a resource and decode its JSON body.

        Args:
            resource: Path relative to the API base URL
            save_to: Optional path to write the raw body to

        Returns:
            Decoded JSON document
        """
        url = f"{self._base_url}/{resource}"
        logger.debug(f"Postman API: GET /{resource}")

        try:
            response = self._session.get(url, timeout=REQUEST_TIMEOUT)
        except (Timeout, ConnectTimeout, ReadTimeout, ConnectionError):
            raise APIUnreachableError(endpoint=self._base_url)
        except requests.RequestException as e:
            raise FetchError(resource, str(e))

        if response.status_code == 401:
            raise InvalidCredentialsError(credential='POSTMAN_API_KEY', endpoint=self._base_url)

        if not response.ok:
            raise FetchError(resource, f"HTTP {response.status_code}")

        body = response.text
        if save_to is not None:
            try:
                save_to.write_text(body, encoding='utf-8')
            except OSError as e:
                raise FetchError(resource, f"cannot save raw response to {save_to}: {e}")

        try:
            return json.loads(body)
        except ValueError:
            raise FetchError(
                resource,
                "response is not valid JSON",
                saved_to=str(save_to) if save_to else None
            )
