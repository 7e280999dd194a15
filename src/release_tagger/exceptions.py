"""Exception hierarchy for release-tagger.

Every error raised by the package derives from ReleaseTaggerError so the
orchestrator can turn any of them into a single failure result.
"""

from __future__ import annotations


class ReleaseTaggerError(Exception):
    """Base class for all release-tagger errors."""


# Configuration


class ConfigError(ReleaseTaggerError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Preconditions on the triggering event


class PreconditionError(ReleaseTaggerError):
    """The triggering event does not allow a release."""


class NotAPullRequestError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("This action can only be run on Pull Request")


class PullRequestNotMergedError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("This action should only run after a PR is merged")


class UnsquashedPullRequestError(PreconditionError):
    def __init__(self, commit_count: int) -> None:
        self.commit_count = commit_count
        super().__init__(
            f"Pull request must be squashed into a single commit (found {commit_count} commits)"
        )


# Classification


class ClassificationError(ReleaseTaggerError):
    """No recognised prefix was found in the commit message(s)."""

    def __init__(self, message: str = "Pull request does not contain correct commit messages"):
        super().__init__(message)


# Versions


class VersionError(ReleaseTaggerError):
    """Base class for version errors."""


class VersionParseError(VersionError):
    """A version tag does not have the vX.Y.Z shape."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Invalid version format. Expected format: vX.Y.Z")


class InvalidIncrementError(VersionError):
    """An increment other than MAJOR, MINOR or PATCH reached the incrementer."""

    def __init__(self) -> None:
        super().__init__("Invalid increment type. Expected 'MAJOR', 'MINOR', or 'PATCH'.")


# External collaborators


class GitError(ReleaseTaggerError):
    """A local git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        full = f"{message}: {stderr.strip()}" if stderr and stderr.strip() else message
        super().__init__(full)


class GitHubError(ReleaseTaggerError):
    """A GitHub API call failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)
