"""Shared fixtures for release-tagger tests."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from release_tagger.config.models import ReleaseTaggerConfig, VersionConfig
from release_tagger.forge.event import ActionContext
from release_tagger.forge.github import GitHubClient
from release_tagger.vcs.git import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(path: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=path, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def commit_file(path: Path, name: str, message: str) -> str:
    (path / name).write_text(message)
    run_git(path, "add", name)
    run_git(path, "commit", "-m", message)
    return run_git(path, "rev-parse", "HEAD")


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """An initialised git repository with one commit and no tags."""
    run_git(tmp_path, "init", "-q")
    run_git(tmp_path, "config", "user.email", "test@example.com")
    run_git(tmp_path, "config", "user.name", "Test")
    run_git(tmp_path, "config", "commit.gpgsign", "false")
    run_git(tmp_path, "config", "tag.gpgsign", "false")
    commit_file(tmp_path, "README.md", "chore: initial commit")
    return tmp_path


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.release-tagger.commits]
types_minor = ["feat", "feature"]
types_patch = ["fix", "perf"]

[tool.release-tagger.version]
source = "nearest"
"""
    )
    return tmp_path


@pytest.fixture
def merged_pr_payload() -> dict:
    return {
        "action": "closed",
        "pull_request": {
            "number": 42,
            "merged": True,
        },
        "repository": {"full_name": "acme/widgets"},
    }


@pytest.fixture
def merged_context(merged_pr_payload: dict) -> ActionContext:
    return ActionContext.from_payload(merged_pr_payload, sha="merge456")


@pytest.fixture
def config() -> ReleaseTaggerConfig:
    return ReleaseTaggerConfig(version=VersionConfig(fetch_tags=False))


@pytest.fixture
def mock_repo() -> MagicMock:
    """GitRepository double whose current tag is v1.2.3."""
    repo = MagicMock(spec=GitRepository)
    repo.get_current_version_tag.return_value = "v1.2.3"
    return repo


@pytest.fixture
def mock_forge() -> MagicMock:
    """GitHubClient double returning a feat commit."""
    forge = MagicMock(spec=GitHubClient)
    forge.get_commit_message.return_value = "feat: add export button"
    forge.list_pull_request_commit_messages.return_value = ["feat: add export button"]
    forge.create_tag.return_value = "tagobj789"
    return forge
