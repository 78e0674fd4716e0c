"""Pytest configuration and fixtures for integration tests.

Integration tests run the export against a real git working copy whose
origin is a local bare repository. The Postman API and GitLab are replaced
by in-memory doubles; the GitLab double reads commit diffs from the real
repository.
"""

from pathlib import Path

import pytest

from src.cli.models import GitSettings, RunConfig, TrackerSettings
from tests.fixtures.sample_collections import WORKSPACE_ID
from tests.helpers.git_test_utils import create_clone_with_remote


@pytest.fixture
def docs_repo(tmp_path) -> Path:
    """Working copy of the documentation repository."""
    return create_clone_with_remote(tmp_path)


@pytest.fixture
def run_config(docs_repo) -> RunConfig:
    """Run configuration writing into docs_repo."""
    return RunConfig(
        output_dir=str(docs_repo),
        workspace_id=WORKSPACE_ID,
        git=GitSettings(remote="origin", branch="master"),
        tracker=TrackerSettings(project_id="docs/api-docs", request_delay=0),
        postman_api_key="PMAK-test",
        gitlab_token="glpat-test",
    )
