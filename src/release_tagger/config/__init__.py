"""Configuration management for release-tagger."""

from __future__ import annotations

from release_tagger.config.loader import load_config
from release_tagger.config.models import (
    CommitsConfig,
    GitHubConfig,
    ReleaseConfig,
    ReleaseNotesConfig,
    ReleaseTaggerConfig,
    VersionConfig,
)

__all__ = [
    "CommitsConfig",
    "GitHubConfig",
    "ReleaseConfig",
    "ReleaseNotesConfig",
    "ReleaseTaggerConfig",
    "VersionConfig",
    "load_config",
]
