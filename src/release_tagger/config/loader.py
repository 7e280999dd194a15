"""Load configuration from pyproject.toml.

Settings live in the ``[tool.release-tagger]`` table. A repository without a
pyproject.toml, or without the table, gets the default configuration, so the
action works in projects that are not Python projects at all.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_tagger.config.models import ReleaseTaggerConfig
from release_tagger.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_KEY = "release-tagger"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_tagger_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-tagger]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_KEY, {}))


def merge_overrides(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overrides`` into ``base``; ``None`` values are ignored."""
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_overrides(merged[key], value)
        elif isinstance(value, dict):
            merged[key] = merge_overrides({}, value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ReleaseTaggerConfig:
    """Load the configuration for the project at ``path``.

    Args:
        path: Project directory (defaults to the current directory)
        overrides: Nested values (e.g. from CLI options) that take
            precedence over the file

    Raises:
        ConfigValidationError: If the resulting configuration is invalid
    """
    try:
        raw = extract_release_tagger_config(load_pyproject_toml(find_pyproject_toml(path)))
    except ConfigNotFoundError:
        raw = {}

    if overrides:
        raw = merge_overrides(raw, overrides)

    try:
        return ReleaseTaggerConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] configuration: {e}") from e
