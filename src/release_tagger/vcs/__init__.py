"""Version control helpers."""

from __future__ import annotations

from release_tagger.vcs.git import GitRepository

__all__ = ["GitRepository"]
