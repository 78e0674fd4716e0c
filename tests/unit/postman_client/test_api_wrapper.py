"""Unit tests for postman_client.api_wrapper module."""

import json

import pytest
from unittest.mock import Mock
from requests.exceptions import ConnectTimeout, ConnectionError, ReadTimeout

from src.postman_client.api_wrapper import (
    REQUEST_TIMEOUT,
    CollectionSummary,
    PostmanClient,
)
from src.postman_client.errors import (
    APIUnreachableError,
    FetchError,
    InvalidCredentialsError,
)
from tests.fixtures.sample_collections import (
    PING_COLLECTION,
    WORKSPACE_ID,
    WORKSPACE_RESPONSE,
    collection_response,
)


def make_response(status_code=200, body=None, text=None):
    """Create a mock requests.Response carrying a JSON or raw body."""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text if text is not None else json.dumps(body)
    return response


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    return PostmanClient(api_key="PMAK-test", session=session)


class TestGetWorkspace:
    """Test cases for PostmanClient.get_workspace."""

    def test_api_key_header(self, client, session):
        """The API key should be sent as X-API-Key."""
        assert session.headers["X-API-Key"] == "PMAK-test"

    def test_lists_collections_in_order(self, client, session):
        """Collections should be listed with uid and name in API order."""
        session.get.return_value = make_response(body=WORKSPACE_RESPONSE)

        collections = client.get_workspace(WORKSPACE_ID)

        assert collections == [
            CollectionSummary(uid="1234-8f3c0e52", name="API"),
            CollectionSummary(uid="1234-4a9e5bd2", name="Shop API"),
        ]
        session.get.assert_called_once_with(
            f"https://api.getpostman.com/workspaces/{WORKSPACE_ID}",
            timeout=REQUEST_TIMEOUT,
        )

    def test_saves_raw_response(self, client, session, tmp_path):
        """The raw body should be written unchanged when requested."""
        raw = json.dumps(WORKSPACE_RESPONSE, indent=4)
        session.get.return_value = make_response(text=raw)
        target = tmp_path / "workspace.json"

        client.get_workspace(WORKSPACE_ID, save_to=target)

        assert target.read_text(encoding="utf-8") == raw

    def test_workspace_without_collections(self, client, session):
        """A workspace without collections should give an empty list."""
        session.get.return_value = make_response(body={"workspace": {"id": WORKSPACE_ID}})

        assert client.get_workspace(WORKSPACE_ID) == []

    def test_missing_workspace_key_raises(self, client, session, tmp_path):
        """A response without workspace should raise FetchError naming the saved file."""
        session.get.return_value = make_response(body={"error": {"name": "instanceNotFoundError"}})
        target = tmp_path / "workspace.json"

        with pytest.raises(FetchError) as exc_info:
            client.get_workspace(WORKSPACE_ID, save_to=target)

        assert exc_info.value.saved_to == str(target)
        assert target.exists()

    def test_collection_entry_without_name_raises(self, client, session):
        """A collection entry missing uid or name should raise FetchError."""
        session.get.return_value = make_response(body={
            "workspace": {"id": WORKSPACE_ID, "collections": [{"id": "8f3c0e52", "uid": "1234-8f3c0e52"}]},
        })

        with pytest.raises(FetchError, match="without uid or name"):
            client.get_workspace(WORKSPACE_ID)

    def test_unwritable_snapshot_raises_fetch_error(self, client, session, tmp_path):
        """A snapshot that cannot be written should raise FetchError."""
        session.get.return_value = make_response(body=WORKSPACE_RESPONSE)
        target = tmp_path / "missing" / "workspace.json"

        with pytest.raises(FetchError, match="cannot save raw response"):
            client.get_workspace(WORKSPACE_ID, save_to=target)


class TestGetCollection:
    """Test cases for PostmanClient.get_collection."""

    def test_returns_collection_object(self, client, session):
        """The collection object should be unwrapped."""
        session.get.return_value = make_response(body=collection_response(PING_COLLECTION))

        assert client.get_collection("1234-8f3c0e52") == PING_COLLECTION
        assert session.get.call_args.args[0] == (
            "https://api.getpostman.com/collections/1234-8f3c0e52"
        )

    def test_wrong_schema_raises(self, client, session):
        """Collections in another format version should be rejected."""
        data = collection_response(PING_COLLECTION)
        data["collection"]["info"]["schema"] = (
            "https://schema.getpostman.com/json/collection/v2.0.0/collection.json"
        )
        session.get.return_value = make_response(body=data)

        with pytest.raises(FetchError, match="v2.0.0"):
            client.get_collection("1234-8f3c0e52")

    def test_missing_schema_raises(self, client, session):
        """Collections without schema tag should be rejected."""
        session.get.return_value = make_response(body={"collection": {"info": {"name": "API"}}})

        with pytest.raises(FetchError):
            client.get_collection("1234-8f3c0e52")

    def test_raw_body_saved_even_when_invalid(self, client, session, tmp_path):
        """The raw response should be on disk for inspection after a failure."""
        session.get.return_value = make_response(body={"collection": {}})
        target = tmp_path / "collection.json"

        with pytest.raises(FetchError):
            client.get_collection("1234-8f3c0e52", save_to=target)

        assert json.loads(target.read_text(encoding="utf-8")) == {"collection": {}}


class TestErrorTranslation:
    """Test cases for HTTP error translation."""

    def test_unauthorized_raises_invalid_credentials(self, client, session):
        """HTTP 401 should raise InvalidCredentialsError."""
        session.get.return_value = make_response(401, body={"error": {"name": "AuthenticationError"}})

        with pytest.raises(InvalidCredentialsError) as exc_info:
            client.get_workspace(WORKSPACE_ID)

        assert exc_info.value.credential == "POSTMAN_API_KEY"

    def test_not_found_raises_fetch_error(self, client, session):
        """Other HTTP errors should raise FetchError with the status."""
        session.get.return_value = make_response(404, body={})

        with pytest.raises(FetchError, match="HTTP 404"):
            client.get_collection("missing")

    @pytest.mark.parametrize("error", [
        ConnectTimeout("timed out"),
        ReadTimeout("timed out"),
        ConnectionError("refused"),
    ])
    def test_network_errors_raise_unreachable(self, client, session, error):
        """Timeouts and connection errors should raise APIUnreachableError."""
        session.get.side_effect = error

        with pytest.raises(APIUnreachableError) as exc_info:
            client.get_workspace(WORKSPACE_ID)

        assert exc_info.value.endpoint == "https://api.getpostman.com"

    def test_invalid_json_raises_fetch_error(self, client, session):
        """A body that is not JSON should raise FetchError."""
        session.get.return_value = make_response(text="<html>maintenance</html>")

        with pytest.raises(FetchError, match="not valid JSON"):
            client.get_workspace(WORKSPACE_ID)
