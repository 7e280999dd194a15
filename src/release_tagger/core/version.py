"""Semantic version parsing and incrementing.

Release tags have the shape ``vMAJOR.MINOR.PATCH``. Anything else is
rejected rather than guessed at: a malformed tag must stop the release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self

from release_tagger.exceptions import InvalidIncrementError, VersionParseError

_VERSION_RE = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


class Increment(Enum):
    """Magnitude of a version bump."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Version:
    """A released version: three non-negative integers."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str, prefix: str = "v") -> Self:
        """Parse ``vX.Y.Z`` (the prefix is optional).

        Raises:
            VersionParseError: If the string is not exactly three numeric parts
        """
        text = value.strip()
        if prefix and text.startswith(prefix):
            text = text[len(prefix) :]
        match = _VERSION_RE.match(text)
        if match is None:
            raise VersionParseError(value)
        return cls(int(match["major"]), int(match["minor"]), int(match["patch"]))

    def bump(self, increment: Increment) -> Version:
        """Return the next version for ``increment``.

        Raises:
            InvalidIncrementError: For ``Increment.NONE`` or a non-Increment value
        """
        if increment is Increment.MAJOR:
            return Version(self.major + 1, 0, 0)
        if increment is Increment.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if increment is Increment.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        raise InvalidIncrementError()

    def to_tag(self, prefix: str = "v") -> str:
        return f"{prefix}{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def next_version(current: str, increment: Increment, prefix: str = "v") -> str:
    """Compute the tag that follows ``current``.

    >>> next_version("v1.4.9", Increment.MINOR)
    'v1.5.0'
    """
    return Version.parse(current, prefix).bump(increment).to_tag(prefix)
