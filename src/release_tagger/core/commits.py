"""Commit message classification.

A commit message is scanned line by line. A line is a change entry when it
starts (optionally after a ``* `` bullet, as in squash-merge bodies) with
one of the configured prefixes, an optional ``(scope)``, an optional ``!``
and ``: `` followed by a description::

    feat(api): add export endpoint
    * fix!: drop the legacy token format

Lines with a minor prefix become features, lines with a patch prefix become
fixes, and any matched line containing ``!`` is a breaking change. The
overall increment is the most severe one found. Every bucket keeps message
order, so breaking ``feat!`` and ``fix!`` lines stay interleaved as written.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_tagger.core.version import Increment
from release_tagger.exceptions import ClassificationError

if TYPE_CHECKING:
    from release_tagger.config.models import CommitsConfig

DEFAULT_MINOR_PREFIXES = ("feat",)
DEFAULT_PATCH_PREFIXES = ("fix",)

_LINE_GRAMMAR = r"^(?:\* )?(?P<type>{types})(?:\((?P<scope>[^)]+)\))?!?: (?P<description>.+)"


def build_prefix_pattern(prefixes: Iterable[str]) -> re.Pattern[str] | None:
    """Compile the line grammar for a set of prefixes.

    Returns None when there are no prefixes, so that an empty list matches
    nothing instead of every ``: ``-prefixed line.
    """
    alternatives = "|".join(re.escape(p) for p in prefixes)
    if not alternatives:
        return None
    return re.compile(_LINE_GRAMMAR.format(types=alternatives))


@dataclass(frozen=True)
class ChangeLine:
    """One classified line of a commit message."""

    commit_type: str
    scope: str | None
    description: str
    increment: Increment

    @property
    def is_breaking(self) -> bool:
        return self.increment is Increment.MAJOR


@dataclass(frozen=True)
class ClassifiedChanges:
    """Change descriptions bucketed by severity, in message order."""

    breaking: tuple[str, ...] = ()
    features: tuple[str, ...] = ()
    fixes: tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[ChangeLine]) -> ClassifiedChanges:
        buckets: dict[Increment, list[str]] = {
            Increment.MAJOR: [],
            Increment.MINOR: [],
            Increment.PATCH: [],
        }
        for line in lines:
            buckets[line.increment].append(line.description)
        return cls(
            breaking=tuple(buckets[Increment.MAJOR]),
            features=tuple(buckets[Increment.MINOR]),
            fixes=tuple(buckets[Increment.PATCH]),
        )

    @property
    def increment(self) -> Increment:
        """The most severe increment among the collected changes."""
        if self.breaking:
            return Increment.MAJOR
        if self.features:
            return Increment.MINOR
        if self.fixes:
            return Increment.PATCH
        return Increment.NONE

    @property
    def is_empty(self) -> bool:
        return self.increment is Increment.NONE

    def require_increment(self) -> Increment:
        """Return the increment, failing when nothing releasable was found.

        Raises:
            ClassificationError: If no line matched a configured prefix
        """
        if self.is_empty:
            raise ClassificationError()
        return self.increment


class CommitClassifier:
    """Classify commit messages against minor and patch prefix lists."""

    def __init__(
        self,
        minor_prefixes: Sequence[str] = DEFAULT_MINOR_PREFIXES,
        patch_prefixes: Sequence[str] = DEFAULT_PATCH_PREFIXES,
    ) -> None:
        self.minor_prefixes = tuple(minor_prefixes)
        self.patch_prefixes = tuple(patch_prefixes)
        self._minor_re = build_prefix_pattern(self.minor_prefixes)
        self._patch_re = build_prefix_pattern(self.patch_prefixes)

    @classmethod
    def from_config(cls, config: CommitsConfig) -> CommitClassifier:
        return cls(config.types_minor, config.types_patch)

    def parse_line(self, line: str) -> ChangeLine | None:
        """Classify a single line, or return None if it is not a change entry.

        Minor prefixes are tried before patch prefixes, so a prefix listed in
        both counts as a feature.
        """
        for pattern, increment in (
            (self._minor_re, Increment.MINOR),
            (self._patch_re, Increment.PATCH),
        ):
            if pattern is None:
                continue
            match = pattern.match(line)
            if match is None:
                continue
            if "!" in match.group(0):
                increment = Increment.MAJOR
            return ChangeLine(
                commit_type=match["type"],
                scope=match["scope"],
                description=match["description"],
                increment=increment,
            )
        return None

    def parse_message(self, message: str) -> list[ChangeLine]:
        return [
            change
            for line in message.splitlines()
            if (change := self.parse_line(line)) is not None
        ]

    def classify(self, message: str) -> ClassifiedChanges:
        """Classify every line of a (possibly multi-line) commit message."""
        return ClassifiedChanges.from_lines(self.parse_message(message))

    def classify_messages(self, messages: Iterable[str]) -> ClassifiedChanges:
        """Classify several commit messages as one change set."""
        return ClassifiedChanges.from_lines(
            change for message in messages for change in self.parse_message(message)
        )


def classify_message(
    message: str,
    minor_prefixes: Sequence[str] = DEFAULT_MINOR_PREFIXES,
    patch_prefixes: Sequence[str] = DEFAULT_PATCH_PREFIXES,
) -> ClassifiedChanges:
    """Shortcut for ``CommitClassifier(...).classify(message)``."""
    return CommitClassifier(minor_prefixes, patch_prefixes).classify(message)
