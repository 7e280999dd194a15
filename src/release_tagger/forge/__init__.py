"""Hosted repository integration (GitHub)."""

from __future__ import annotations

from release_tagger.forge.event import ActionContext, PullRequest
from release_tagger.forge.github import GitHubClient

__all__ = ["ActionContext", "GitHubClient", "PullRequest"]
