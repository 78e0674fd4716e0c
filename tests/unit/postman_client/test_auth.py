"""Unit tests for postman_client.auth module."""

import pytest
from unittest.mock import patch

from src.postman_client.auth import Authenticator, Credentials
from src.postman_client.errors import InvalidCredentialsError


@pytest.fixture
def authenticator():
    """Authenticator that does not read any .env file."""
    with patch("src.postman_client.auth.load_dotenv"):
        yield Authenticator()


class TestAuthenticator:
    """Test cases for Authenticator.get_credentials."""

    def test_loads_env_file(self):
        """The given .env file should be loaded."""
        with patch("src.postman_client.auth.load_dotenv") as mock_load:
            Authenticator(env_file="custom.env")

        mock_load.assert_called_once_with("custom.env")

    def test_all_credentials(self, authenticator, monkeypatch):
        """All variables should be returned, without trailing slash on the URL."""
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-test")
        monkeypatch.setenv("GITLAB_URL", "https://gitlab.example.com/")
        monkeypatch.setenv("GITLAB_TOKEN", "glpat-test")

        assert authenticator.get_credentials() == Credentials(
            postman_api_key="PMAK-test",
            gitlab_url="https://gitlab.example.com",
            gitlab_token="glpat-test",
        )

    def test_gitlab_url_defaults_to_gitlab_com(self, authenticator, monkeypatch):
        """A missing GITLAB_URL should default to gitlab.com."""
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-test")
        monkeypatch.delenv("GITLAB_URL", raising=False)
        monkeypatch.setenv("GITLAB_TOKEN", "glpat-test")

        assert authenticator.get_credentials().gitlab_url == "https://gitlab.com"

    def test_missing_api_key_raises(self, authenticator, monkeypatch):
        """A missing POSTMAN_API_KEY should raise InvalidCredentialsError."""
        monkeypatch.delenv("POSTMAN_API_KEY", raising=False)
        monkeypatch.setenv("GITLAB_TOKEN", "glpat-test")

        with pytest.raises(InvalidCredentialsError) as exc_info:
            authenticator.get_credentials()

        assert exc_info.value.credential == "POSTMAN_API_KEY"

    def test_missing_token_raises_when_tracker_required(self, authenticator, monkeypatch):
        """A missing GITLAB_TOKEN should raise when issues are reconciled."""
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-test")
        monkeypatch.delenv("GITLAB_TOKEN", raising=False)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            authenticator.get_credentials()

        assert exc_info.value.credential == "GITLAB_TOKEN"

    def test_missing_token_allowed_without_tracker(self, authenticator, monkeypatch):
        """Without the tracker an empty token should be accepted."""
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-test")
        monkeypatch.delenv("GITLAB_TOKEN", raising=False)

        assert authenticator.get_credentials(require_tracker=False).gitlab_token == ""

    def test_secrets_not_in_error_message(self, authenticator, monkeypatch):
        """Error messages should name the variable, never a value."""
        monkeypatch.setenv("POSTMAN_API_KEY", "PMAK-very-secret")
        monkeypatch.setenv("GITLAB_TOKEN", "")

        with pytest.raises(InvalidCredentialsError) as exc_info:
            authenticator.get_credentials()

        assert "PMAK-very-secret" not in str(exc_info.value)
