"""Triggering event context.

GitHub Actions describes the triggering event through environment variables
(``GITHUB_REPOSITORY``, ``GITHUB_SHA``) and a JSON payload at
``GITHUB_EVENT_PATH``. Only the fields needed for a release are modelled here.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from release_tagger.exceptions import ConfigValidationError


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PullRequest(_Payload):
    number: int
    merged: bool = False


class ActionContext(_Payload):
    """Repository, commit and pull request that triggered the run."""

    repository: str = ""
    sha: str = ""
    pull_request: PullRequest | None = None

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        repository: str | None = None,
        sha: str | None = None,
    ) -> ActionContext:
        """Build a context from a decoded webhook payload.

        Raises:
            ConfigValidationError: If the pull request part of the payload is malformed
        """
        if not repository:
            repository = (payload.get("repository") or {}).get("full_name", "")
        try:
            return cls(
                repository=repository or "",
                sha=sha or "",
                pull_request=payload.get("pull_request"),
            )
        except ValidationError as e:
            raise ConfigValidationError(f"Malformed event payload: {e}") from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ActionContext:
        """Build the context from the GitHub Actions environment.

        A missing event file produces a context without a pull request.
        """
        env = os.environ if environ is None else environ
        payload: dict[str, Any] = {}

        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).is_file():
            try:
                payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ConfigValidationError(f"Invalid event payload in {event_path}: {e}") from e

        return cls.from_payload(
            payload,
            repository=env.get("GITHUB_REPOSITORY"),
            sha=env.get("GITHUB_SHA"),
        )
