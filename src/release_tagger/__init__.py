"""release-tagger: tag releases from conventional commit messages."""

from __future__ import annotations

__version__ = "0.3.0"
