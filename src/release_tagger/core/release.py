"""Release orchestration.

A release is a straight line::

    preconditions -> commit message(s) -> classify -> current version
        -> next version -> release notes -> tag + ref

Nothing is written to the hosted repository before the last step, so a
failure anywhere leaves no partial state behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from release_tagger.core.changelog import render_tag_message
from release_tagger.core.commits import ClassifiedChanges, CommitClassifier
from release_tagger.core.version import Increment, Version
from release_tagger.exceptions import (
    NotAPullRequestError,
    PullRequestNotMergedError,
    ReleaseTaggerError,
    UnsquashedPullRequestError,
)

if TYPE_CHECKING:
    from release_tagger.config.models import ReleaseTaggerConfig
    from release_tagger.forge.event import ActionContext, PullRequest
    from release_tagger.forge.github import GitHubClient
    from release_tagger.vcs.git import GitRepository


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def block(self, title: str, body: str) -> None: ...


class _SilentReporter:
    def info(self, message: str) -> None:
        pass

    def block(self, title: str, body: str) -> None:
        pass


@dataclass(frozen=True)
class ReleasePlan:
    """Everything decided before anything is published."""

    current_tag: str
    next_version: Version
    tag: str
    increment: Increment
    changes: ClassifiedChanges
    message: str
    target_sha: str


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of a run: a plan (and tag sha once published) or an error."""

    plan: ReleasePlan | None = None
    tag_sha: str | None = None
    error: ReleaseTaggerError | None = None

    @classmethod
    def success(cls, plan: ReleasePlan, tag_sha: str | None = None) -> ReleaseResult:
        return cls(plan=plan, tag_sha=tag_sha)

    @classmethod
    def failure(cls, error: ReleaseTaggerError) -> ReleaseResult:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def published(self) -> bool:
        return self.tag_sha is not None

    @property
    def error_message(self) -> str | None:
        if self.error is None:
            return None
        return str(self.error) or "Unknown error"


class ReleaseRunner:
    """Turn a merged pull request into a release tag.

    All collaborators are passed in; the runner holds no global state.
    """

    def __init__(
        self,
        config: ReleaseTaggerConfig,
        repo: GitRepository,
        forge: GitHubClient,
        context: ActionContext,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.repo = repo
        self.forge = forge
        self.context = context
        self.reporter = reporter or _SilentReporter()
        self.classifier = CommitClassifier.from_config(config.commits)

    def check_preconditions(self) -> PullRequest:
        """Return the triggering pull request.

        Raises:
            NotAPullRequestError: If the event is not a pull request event
            PullRequestNotMergedError: If merging is required and has not happened
        """
        pull_request = self.context.pull_request
        if pull_request is None:
            raise NotAPullRequestError()
        if self.config.release.require_merged and not pull_request.merged:
            raise PullRequestNotMergedError()
        return pull_request

    def read_commit_messages(self, pull_request: PullRequest) -> list[str]:
        """Commit message(s) to classify for the configured strategy.

        Raises:
            UnsquashedPullRequestError: If the squash strategy finds more than one commit
        """
        if self.config.release.strategy == "squash":
            messages = self.forge.list_pull_request_commit_messages(pull_request.number)
            if len(messages) != 1:
                raise UnsquashedPullRequestError(len(messages))
            return messages
        return [self.forge.get_commit_message(self.context.sha)]

    def read_current_tag(self) -> str:
        version_config = self.config.version
        if version_config.fetch_tags:
            self.repo.fetch_tags()
        return self.repo.get_current_version_tag(
            version_config.source,
            self.config.tag_pattern,
            self.config.default_tag,
        )

    def plan(self) -> ReleasePlan:
        """Compute the release without publishing it.

        Raises:
            ReleaseTaggerError: Any precondition, classification, version or
                collaborator failure
        """
        pull_request = self.check_preconditions()

        messages = self.read_commit_messages(pull_request)
        changes = self.classifier.classify_messages(messages)
        increment = changes.require_increment()

        prefix = self.config.effective_tag_prefix
        current_tag = self.read_current_tag()
        self.reporter.info(f"Current Application Version: {current_tag}")

        next_version = Version.parse(current_tag, prefix).bump(increment)
        tag = next_version.to_tag(prefix)
        self.reporter.info(f"Next Application Version: {tag}")

        message = render_tag_message(changes, tag, self.config.notes)
        self.reporter.block(f"Release notes for {tag}", message)

        return ReleasePlan(
            current_tag=current_tag,
            next_version=next_version,
            tag=tag,
            increment=increment,
            changes=changes,
            message=message,
            target_sha=self.context.sha,
        )

    def publish(self, plan: ReleasePlan) -> str:
        tag_sha = self.forge.create_tag(plan.tag, plan.message, plan.target_sha)
        self.reporter.info(f"Created tag {plan.tag} at {plan.target_sha}")
        return tag_sha

    def run(self, *, execute: bool = True) -> ReleaseResult:
        """Plan and (when ``execute`` is set) publish the release.

        Errors are returned in the result, never raised.
        """
        try:
            plan = self.plan()
            if not execute:
                return ReleaseResult.success(plan)
            return ReleaseResult.success(plan, self.publish(plan))
        except ReleaseTaggerError as e:
            return ReleaseResult.failure(e)
