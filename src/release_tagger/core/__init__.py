"""Core business logic for release-tagger.

This module contains the fundamental building blocks:
- Version parsing and incrementing
- Commit message classification
- Release notes rendering
- Release orchestration
"""

from __future__ import annotations

from release_tagger.core.changelog import generate_release_notes, render_tag_message
from release_tagger.core.commits import (
    ChangeLine,
    ClassifiedChanges,
    CommitClassifier,
    classify_message,
)
from release_tagger.core.release import ReleasePlan, ReleaseResult, ReleaseRunner
from release_tagger.core.version import Increment, Version, next_version

__all__ = [
    # Commits
    "ChangeLine",
    "ClassifiedChanges",
    "CommitClassifier",
    # Version
    "Increment",
    # Release
    "ReleasePlan",
    "ReleaseResult",
    "ReleaseRunner",
    "Version",
    "classify_message",
    # Changelog
    "generate_release_notes",
    "next_version",
    "render_tag_message",
]
