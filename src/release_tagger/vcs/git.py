"""Local git queries used to find the current release tag.

Two ways of finding the current version are supported:

- ``latest``: list every tag matching the prefix, sorted by version
  (``git tag --sort=-v:refname``) and take the first one.
- ``nearest``: ask git for the closest tag reachable from HEAD
  (``git describe --tags --abbrev=0``).

They disagree when a newer tag exists that is not an ancestor of HEAD.
A repository without any release tag is not an error: callers fall back
to a default version.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from release_tagger.exceptions import GitError

_NO_TAG_MARKERS = ("no names found", "no tags can describe")


class GitRepository:
    """Thin wrapper around the git executable for one working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {args[0]} failed with exit code {e.returncode}", stderr=e.stderr) from e
        return result.stdout.strip()

    def fetch_tags(self) -> None:
        """Fetch tags from the default remote."""
        self._run("fetch", "--tags")

    def list_tags(self, pattern: str = "*") -> list[str]:
        """Tags matching ``pattern``, highest version first."""
        output = self._run("tag", "--list", pattern, "--sort=-v:refname")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_latest_tag(self, pattern: str = "*") -> str | None:
        tags = self.list_tags(pattern)
        return tags[0] if tags else None

    def describe_nearest_tag(self, pattern: str = "*") -> str | None:
        """Closest tag reachable from HEAD, or None if there is none."""
        try:
            output = self._run("describe", "--tags", "--abbrev=0", "--match", pattern)
        except GitError as e:
            if e.stderr and any(m in e.stderr.lower() for m in _NO_TAG_MARKERS):
                return None
            raise
        return output or None

    def get_current_version_tag(self, source: str, pattern: str, default: str) -> str:
        """Resolve the current release tag using the configured ``source``.

        Args:
            source: ``latest`` or ``nearest``
            pattern: Tag glob, e.g. ``v*``
            default: Tag to assume when no release tag exists

        Raises:
            GitError: For an unknown source or a failing git command
        """
        if source == "latest":
            tag = self.get_latest_tag(pattern)
        elif source == "nearest":
            tag = self.describe_nearest_tag(pattern)
        else:
            raise GitError(f"Unknown version source: {source!r}")
        return tag or default
