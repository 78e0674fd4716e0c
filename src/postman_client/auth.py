"""Authentication module for loading API credentials.

This module handles loading the Postman API key and the GitLab access token
from environment variables using python-dotenv. It validates that all
required credentials are present and raises appropriate errors if any are
missing.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

POSTMAN_API_URL = "https://api.getpostman.com"
DEFAULT_GITLAB_URL = "https://gitlab.com"


class Credentials(NamedTuple):
    """Credentials for the collection source and the issue tracker."""
    postman_api_key: str
    gitlab_url: str
    gitlab_token: str


class Authenticator:
    """Loads and validates credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Required environment variables:
        POSTMAN_API_KEY: Postman API key (sent as X-API-Key)
        GITLAB_TOKEN: GitLab personal or project access token

    Optional environment variables:
        GITLAB_URL: GitLab instance URL (default https://gitlab.com)

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Tracking issues on {creds.gitlab_url}")
    """

    def __init__(self, env_file: Optional[str] = None):
        """Initialize the authenticator by loading environment variables.

        Args:
            env_file: Optional explicit path to a .env file
        """
        load_dotenv(env_file)

    def get_credentials(self, require_tracker: bool = True) -> Credentials:
        """Get credentials from environment variables.

        Args:
            require_tracker: Whether GITLAB_TOKEN must be present

        Returns:
            Credentials: A named tuple with the API key, GitLab URL and token

        Raises:
            InvalidCredentialsError: If a required credential is missing
        """
        api_key = os.getenv('POSTMAN_API_KEY')
        gitlab_url = os.getenv('GITLAB_URL') or DEFAULT_GITLAB_URL
        gitlab_token = os.getenv('GITLAB_TOKEN')

        if not api_key:
            raise InvalidCredentialsError(
                credential='POSTMAN_API_KEY',
                endpoint=POSTMAN_API_URL
            )

        if require_tracker and not gitlab_token:
            raise InvalidCredentialsError(
                credential='GITLAB_TOKEN',
                endpoint=gitlab_url
            )

        return Credentials(
            postman_api_key=api_key,
            gitlab_url=gitlab_url.rstrip('/'),
            gitlab_token=gitlab_token or '',
        )
