"""Shared pytest fixtures for release pipeline tests."""

import pytest

from release_pipeline.config.models import PipelineContext
from release_pipeline.domain.models import RawRelease
from release_pipeline.logging.context import clear_log_context
from tests.helpers import load_release_body

RELEASE_ENV_VARS = (
    "RELEASE_TITLE",
    "RELEASE_BODY",
    "RELEASE_TAG",
    "RELEASE_URL",
    "RELEASE_ID",
    "JIRA_TICKET_PREFIX",
    "LOG_LEVEL",
    "GITHUB_OUTPUT",
    "ENVIRONMENT",
    "GITHUB_ACTIONS",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "GITHUB_RUN_ATTEMPT",
)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove release variables from the environment and run in an empty directory.

    Running in tmp_path keeps a developer's release_config.yaml or .env from
    leaking into the test.
    """
    for var in RELEASE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def mock_env_vars(clean_env):
    """Populate the release variables as the release-publication event would."""
    clean_env.setenv("RELEASE_TITLE", "Major Release v2.0")
    clean_env.setenv("RELEASE_BODY", load_release_body("valid-release.md"))
    clean_env.setenv("RELEASE_TAG", "v2.0.0")
    clean_env.setenv("RELEASE_URL", "https://github.com/pde/widgets/releases/tag/v2.0.0")
    clean_env.setenv("RELEASE_ID", "123456")
    return clean_env


@pytest.fixture
def context():
    """Default pipeline context (PDE tickets)."""
    return PipelineContext()


@pytest.fixture
def valid_body():
    return load_release_body("valid-release.md")


@pytest.fixture
def invalid_body():
    return load_release_body("invalid-release.md")


@pytest.fixture
def bugfix_body():
    return load_release_body("bugfix-release.md")


@pytest.fixture
def valid_release(valid_body):
    """Release record for a well-formed major release."""
    return RawRelease(
        title="Major Release v2.0",
        body=valid_body,
        tag="v2.0.0",
        url="https://github.com/pde/widgets/releases/tag/v2.0.0",
        release_id="123456",
    )


@pytest.fixture
def invalid_release(invalid_body):
    """Release record missing sections, emails and valid tickets."""
    return RawRelease(
        title="Quick build",
        body=invalid_body,
        tag="v0.9.1",
        url="https://github.com/pde/widgets/releases/tag/v0.9.1",
    )


@pytest.fixture
def empty_release():
    return RawRelease()
