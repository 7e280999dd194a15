"""GitHub API access via PyGithub.

Only four operations are needed: read a commit message, list the commits of
a pull request, create an annotated tag object and create the ref that
points at it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from github import Auth, Github, GithubException

from release_tagger.exceptions import GitHubError

if TYPE_CHECKING:
    from github.Repository import Repository

DEFAULT_API_URL = "https://api.github.com"

T = TypeVar("T")


class GitHubClient:
    """GitHub operations for a single repository.

    The PyGithub client is created on first use, so constructing a client
    never performs network I/O.
    """

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        *,
        github: Github | None = None,
    ) -> None:
        self.repository = repository
        self.api_url = api_url
        self._token = token
        self._github = github
        self._repo: Repository | None = None

    def __repr__(self) -> str:
        return f"GitHubClient(repository={self.repository!r}, api_url={self.api_url!r})"

    def _call(self, action: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except GithubException as e:
            detail = e.data.get("message") if isinstance(e.data, dict) else None
            raise GitHubError(
                f"Failed to {action}: {detail or e}",
                status=e.status,
            ) from e

    def _client(self) -> Github:
        if self._github is None:
            if not self._token:
                raise GitHubError("A GitHub token is required to publish releases")
            self._github = Github(auth=Auth.Token(self._token), base_url=self.api_url)
        return self._github

    @property
    def repo(self) -> Repository:
        if self._repo is None:
            if not self.repository:
                raise GitHubError("Repository is not set (expected owner/name)")
            self._repo = self._call(
                f"load repository {self.repository}",
                self._client().get_repo,
                self.repository,
            )
        return self._repo

    def get_commit_message(self, sha: str) -> str:
        commit = self._call(f"read commit {sha}", self.repo.get_git_commit, sha)
        return commit.message

    def list_pull_request_commit_messages(self, number: int) -> list[str]:
        """Messages of every commit in pull request ``number``, oldest first."""
        pull = self._call(f"read pull request #{number}", self.repo.get_pull, number)
        commits = self._call(f"list commits of pull request #{number}", lambda: list(pull.get_commits()))
        return [c.commit.message for c in commits]

    def create_tag(self, tag: str, message: str, sha: str) -> str:
        """Create annotated tag ``tag`` on ``sha`` and its ``refs/tags`` ref.

        Returns:
            SHA of the created tag object
        """
        tag_object = self._call(
            f"create tag {tag}",
            self.repo.create_git_tag,
            tag=tag,
            message=message,
            object=sha,
            type="commit",
        )
        self._call(
            f"create ref refs/tags/{tag}",
            self.repo.create_git_ref,
            ref=f"refs/tags/{tag}",
            sha=tag_object.sha,
        )
        return tag_object.sha
