"""Configuration models for release-tagger.

All models are pydantic models with sensible defaults, so an empty
``[tool.release-tagger]`` section (or none at all) yields a working
configuration: feat and fix prefixes, v-prefixed tags, release notes on.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

VersionSource = Literal["latest", "nearest"]
ReleaseStrategy = Literal["merge", "squash"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CommitsConfig(_Section):
    """Commit prefix grammar.

    Attributes:
        types_minor: Prefixes that trigger a MINOR bump (MAJOR with ``!``)
        types_patch: Prefixes that trigger a PATCH bump (MAJOR with ``!``)
    """

    types_minor: list[str] = Field(default_factory=lambda: ["feat"])
    types_patch: list[str] = Field(default_factory=lambda: ["fix"])

    @field_validator("types_minor", "types_patch")
    @classmethod
    def _strip_prefixes(cls, value: list[str]) -> list[str]:
        prefixes = [p.strip() for p in value]
        if any(not p for p in prefixes):
            raise ValueError("commit prefixes must not be empty")
        return prefixes


class VersionConfig(_Section):
    """Where the current version comes from.

    Attributes:
        initial_version: Version assumed when the repository has no tags yet
        tag_prefix: Prefix of release tags
        source: ``latest`` sorts all tags by version, ``nearest`` asks git
            for the closest tag reachable from HEAD
        fetch_tags: Run ``git fetch --tags`` before reading tags
    """

    initial_version: str = "0.1.0"
    tag_prefix: str = "v"
    source: VersionSource = "latest"
    fetch_tags: bool = True


class ReleaseConfig(_Section):
    """Which pull requests may be released and how their messages are read."""

    strategy: ReleaseStrategy = "merge"
    require_merged: bool = True


class ReleaseNotesConfig(_Section):
    """Release notes used as the tag annotation."""

    enabled: bool = True
    breaking_heading: str = "BREAKING CHANGES:"
    features_heading: str = "MAJOR CHANGES:"
    fixes_heading: str = "MINOR CHANGES:"
    tag_message: str = "Release {version}"

    @field_validator("tag_message")
    @classmethod
    def _check_placeholder(cls, value: str) -> str:
        if "{version}" not in value:
            raise ValueError("tag_message must contain the {version} placeholder")
        return value


class GitHubConfig(_Section):
    api_url: str = "https://api.github.com"


class ReleaseTaggerConfig(_Section):
    """Root configuration object."""

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    notes: ReleaseNotesConfig = Field(default_factory=ReleaseNotesConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix

    @property
    def tag_pattern(self) -> str:
        """Glob passed to git when listing release tags."""
        return f"{self.effective_tag_prefix}*"

    @property
    def default_tag(self) -> str:
        """Tag assumed when no release tag exists yet (``v0.1.0`` by default)."""
        return f"{self.effective_tag_prefix}{self.version.initial_version}"
