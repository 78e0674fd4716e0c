"""Unit tests for cli.config module."""

import pytest
from unittest.mock import Mock

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError, ConfigFilesystemError
from src.cli.models import GitSettings, RunConfig, TrackerSettings
from src.postman_client.auth import Authenticator, Credentials
from src.postman_client.errors import InvalidCredentialsError

FULL_CONFIG = """
output_dir: ./docs
workspace_id: 1f0df51a-8658-4ee8-a2a1-d2567dfa09a9
collections:
  - 1234-8f3c0e52
save_raw_json: false
git:
  remote: upstream
  branch: main
  push: true
  commit_message: "docs: refresh"
tracker:
  project_id: docs/api-docs
  request_delay: 0.5
  per_page: 50
  create_label: "docs::new"
  delete_label: "docs::gone"
  collection_label_prefix: "api::"
"""


@pytest.fixture
def authenticator():
    """Authenticator returning fixed credentials."""
    auth = Mock(spec=Authenticator)
    auth.get_credentials.return_value = Credentials(
        postman_api_key="PMAK-test",
        gitlab_url="https://gitlab.example.com",
        gitlab_token="glpat-test",
    )
    return auth


@pytest.fixture
def write_config(tmp_path):
    def _write(content: str) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


class TestConfigLoaderLoad:
    """Test cases for ConfigLoader.load."""

    def test_full_config(self, write_config, authenticator):
        """Every section should be read into RunConfig."""
        config = ConfigLoader.load(write_config(FULL_CONFIG), authenticator=authenticator)

        assert config == RunConfig(
            output_dir="./docs",
            workspace_id="1f0df51a-8658-4ee8-a2a1-d2567dfa09a9",
            collections=("1234-8f3c0e52",),
            save_raw_json=False,
            git=GitSettings(
                remote="upstream", branch="main", push=True, commit_message="docs: refresh"
            ),
            tracker=TrackerSettings(
                project_id="docs/api-docs",
                gitlab_url="https://gitlab.example.com",
                request_delay=0.5,
                per_page=50,
                create_label="docs::new",
                delete_label="docs::gone",
                collection_label_prefix="api::",
            ),
            postman_api_key="PMAK-test",
            gitlab_token="glpat-test",
        )

    def test_minimal_config_defaults(self, write_config, authenticator):
        """Omitted settings should take their defaults."""
        config = ConfigLoader.load(
            write_config("output_dir: out\nworkspace_id: ws\ntracker:\n  project_id: 42\n"),
            authenticator=authenticator,
        )

        assert config.collections == ()
        assert config.save_raw_json is True
        assert config.git == GitSettings()
        assert config.tracker.project_id == "42"
        assert config.tracker.per_page == 20
        assert config.tracker.delete_label == "delete"

    def test_secrets_not_in_repr(self, write_config, authenticator):
        """Credentials should not show up in the config repr."""
        config = ConfigLoader.load(write_config(FULL_CONFIG), authenticator=authenticator)

        assert "PMAK-test" not in repr(config)
        assert "glpat-test" not in repr(config)

    def test_cli_overrides(self, write_config, authenticator):
        """Command line values should win over the file."""
        config = ConfigLoader.load(
            write_config(FULL_CONFIG),
            output_dir="/tmp/out",
            workspace_id="other",
            collections=["a", "b"],
            push=False,
            authenticator=authenticator,
        )

        assert config.output_dir == "/tmp/out"
        assert config.workspace_id == "other"
        assert config.collections == ("a", "b")
        assert config.git.push is False

    def test_missing_file_with_cli_values(self, tmp_path, authenticator):
        """A missing file should be fine when the command line supplies everything."""
        config = ConfigLoader.load(
            str(tmp_path / "absent.yaml"),
            output_dir="out",
            workspace_id="ws",
            require_tracker=False,
            authenticator=authenticator,
        )

        assert config.tracker is None
        authenticator.get_credentials.assert_called_once_with(require_tracker=False)

    def test_missing_required_fields(self, tmp_path, authenticator):
        """Missing output_dir and workspace_id should be reported together."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(str(tmp_path / "absent.yaml"), authenticator=authenticator)

        assert "output_dir" in str(exc_info.value)
        assert "workspace_id" in str(exc_info.value)

    def test_tracker_required(self, write_config, authenticator):
        """Reconciling issues without tracker section should fail."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(
                write_config("output_dir: out\nworkspace_id: ws\n"),
                authenticator=authenticator,
            )

        assert exc_info.value.config_field == "tracker"

    def test_missing_project_id(self, write_config, authenticator):
        """The tracker section must name the project."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(
                write_config("output_dir: out\nworkspace_id: ws\ntracker:\n  per_page: 5\n"),
                authenticator=authenticator,
            )

        assert exc_info.value.config_field == "tracker.project_id"

    @pytest.mark.parametrize("field,value", [
        ("per_page", "0"),
        ("per_page", "ten"),
        ("per_page", "true"),
        ("request_delay", "-1"),
        ("request_delay", "soon"),
    ])
    def test_invalid_tracker_values(self, write_config, authenticator, field, value):
        """Invalid tracker numbers should name the field."""
        content = f"output_dir: out\nworkspace_id: ws\ntracker:\n  project_id: 42\n  {field}: {value}\n"

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config(content), authenticator=authenticator)

        assert exc_info.value.config_field == f"tracker.{field}"

    def test_collections_must_be_list(self, write_config, authenticator):
        """A scalar collections value should be rejected."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(
                write_config("output_dir: out\nworkspace_id: ws\ncollections: abc\n"),
                require_tracker=False,
                authenticator=authenticator,
            )

        assert exc_info.value.config_field == "collections"

    def test_non_boolean_flag(self, write_config, authenticator):
        """Flags should only accept booleans."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(
                write_config("output_dir: out\nworkspace_id: ws\nsave_raw_json: maybe\n"),
                require_tracker=False,
                authenticator=authenticator,
            )

        assert exc_info.value.config_field == "save_raw_json"

    def test_invalid_yaml(self, write_config, authenticator):
        """Broken YAML should raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigLoader.load(write_config("output_dir: [unclosed\n"), authenticator=authenticator)

    def test_non_mapping_yaml(self, write_config, authenticator):
        """A YAML list at the top level should be rejected."""
        with pytest.raises(ConfigError, match="YAML dictionary"):
            ConfigLoader.load(write_config("- a\n- b\n"), authenticator=authenticator)

    def test_unreadable_file(self, tmp_path, authenticator):
        """A directory in place of the file should raise ConfigFilesystemError."""
        with pytest.raises(ConfigFilesystemError):
            ConfigLoader.load(str(tmp_path), authenticator=authenticator)

    def test_missing_credentials_propagate(self, write_config, authenticator):
        """Credential errors should reach the caller unchanged."""
        authenticator.get_credentials.side_effect = InvalidCredentialsError(
            "GITLAB_TOKEN", "https://gitlab.com"
        )

        with pytest.raises(InvalidCredentialsError):
            ConfigLoader.load(write_config(FULL_CONFIG), authenticator=authenticator)
