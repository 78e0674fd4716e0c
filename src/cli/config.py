"""YAML configuration loading and validation.

This module builds the immutable RunConfig of an export run from three
sources, in increasing priority: the YAML configuration file, credentials
from the environment (.env), and command line options.
"""

import logging
from typing import Any, Dict, List, Optional

import yaml

from src.postman_client.auth import Authenticator

from .errors import ConfigError, ConfigFilesystemError
from .models import GitSettings, RunConfig, TrackerSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".postman-docs/config.yaml"


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        output_dir: ./docs
        workspace_id: 1f0df51a-8658-4ee8-a2a1-d2567dfa09a9
        collections: []            # uids, empty = whole workspace
        save_raw_json: true
        git:
          remote: origin
          branch: master
          push: true
          commit_message: "Update API documentation"
        tracker:
          project_id: 42
          request_delay: 1.0
          per_page: 20
          create_label: create
          delete_label: delete
          collection_label_prefix: "collection:"

    A missing file is allowed as long as the command line supplies the
    required values.
    """

    # Required after command line overrides are applied
    REQUIRED_FIELDS = ('output_dir', 'workspace_id')

    @classmethod
    def load(
        cls,
        config_path: str = DEFAULT_CONFIG_PATH,
        output_dir: Optional[str] = None,
        workspace_id: Optional[str] = None,
        collections: Optional[List[str]] = None,
        push: Optional[bool] = None,
        require_tracker: bool = True,
        authenticator: Optional[Authenticator] = None,
    ) -> RunConfig:
        """Load the configuration of a run.

        Args:
            config_path: Path to the YAML configuration file
            output_dir: Overrides ``output_dir``
            workspace_id: Overrides ``workspace_id``
            collections: Overrides ``collections`` when non-empty
            push: Overrides ``git.push``
            require_tracker: Whether the tracker section and token are needed
            authenticator: Credential source (default reads the environment)

        Returns:
            The run configuration

        Raises:
            ConfigFilesystemError: If the file exists but cannot be read
            ConfigError: If the configuration is invalid or incomplete
            InvalidCredentialsError: If a required credential is missing
        """
        config_dict = cls._read(config_path)

        if output_dir is not None:
            config_dict['output_dir'] = output_dir
        if workspace_id is not None:
            config_dict['workspace_id'] = workspace_id
        if collections:
            config_dict['collections'] = list(collections)

        missing = [name for name in cls.REQUIRED_FIELDS if not config_dict.get(name)]
        if missing:
            raise ConfigError(f"Missing required fields: {', '.join(missing)}")

        git = cls._parse_git(config_dict.get('git') or {}, push)

        authenticator = authenticator or Authenticator()
        creds = authenticator.get_credentials(require_tracker=require_tracker)

        tracker = None
        tracker_dict = config_dict.get('tracker')
        if tracker_dict or require_tracker:
            tracker = cls._parse_tracker(tracker_dict, creds.gitlab_url)

        collections_raw = config_dict.get('collections') or []
        if not isinstance(collections_raw, list):
            raise ConfigError("must be a list of collection uids", 'collections')

        return RunConfig(
            output_dir=str(config_dict['output_dir']),
            workspace_id=str(config_dict['workspace_id']),
            collections=tuple(str(uid) for uid in collections_raw),
            save_raw_json=cls._bool(config_dict, 'save_raw_json', True),
            git=git,
            tracker=tracker,
            postman_api_key=creds.postman_api_key,
            gitlab_token=creds.gitlab_token,
        )

    @classmethod
    def _read(cls, config_path: str) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No configuration file at {config_path}")
            return {}
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        logger.info(f"Loaded configuration from {config_path}")
        return config_dict

    @classmethod
    def _parse_git(cls, git_dict: Any, push: Optional[bool]) -> GitSettings:
        if not isinstance(git_dict, dict):
            raise ConfigError("must be a dictionary", 'git')

        defaults = GitSettings()
        branch = git_dict.get('branch', defaults.branch)
        return GitSettings(
            remote=str(git_dict.get('remote') or defaults.remote),
            branch=str(branch) if branch else None,
            push=cls._bool(git_dict, 'push', defaults.push) if push is None else push,
            commit_message=str(git_dict.get('commit_message') or defaults.commit_message),
        )

    @classmethod
    def _parse_tracker(cls, tracker_dict: Any, gitlab_url: str) -> TrackerSettings:
        if not isinstance(tracker_dict, dict):
            raise ConfigError("section is required to reconcile issues", 'tracker')

        project_id = tracker_dict.get('project_id')
        if not project_id:
            raise ConfigError("is required", 'tracker.project_id')

        defaults = TrackerSettings(project_id=str(project_id))

        try:
            request_delay = float(tracker_dict.get('request_delay', defaults.request_delay))
        except (TypeError, ValueError):
            raise ConfigError("must be a number", 'tracker.request_delay')
        if request_delay < 0:
            raise ConfigError("must not be negative", 'tracker.request_delay')

        per_page = tracker_dict.get('per_page', defaults.per_page)
        if not isinstance(per_page, int) or isinstance(per_page, bool) or per_page < 1:
            raise ConfigError("must be a positive integer", 'tracker.per_page')

        return TrackerSettings(
            project_id=str(project_id),
            gitlab_url=gitlab_url,
            request_delay=request_delay,
            per_page=per_page,
            create_label=str(tracker_dict.get('create_label') or defaults.create_label),
            delete_label=str(tracker_dict.get('delete_label') or defaults.delete_label),
            collection_label_prefix=str(
                tracker_dict.get('collection_label_prefix', defaults.collection_label_prefix)
            ),
        )

    @staticmethod
    def _bool(section: Dict[str, Any], name: str, default: bool) -> bool:
        value = section.get(name, default)
        if not isinstance(value, bool):
            raise ConfigError(f"must be true or false, got {value!r}", name)
        return value
