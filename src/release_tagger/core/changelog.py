"""Release notes rendering.

The notes become the annotation of the release tag. They are a pure
function of the classified changes and the version being released:

    ## Release v1.3.0

    ### BREAKING CHANGES:
    - drop the legacy token format
    ### MAJOR CHANGES:
    - add export button

Sections whose bucket is empty are left out entirely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_tagger.config.models import ReleaseNotesConfig

if TYPE_CHECKING:
    from release_tagger.core.commits import ClassifiedChanges


def generate_release_notes(
    changes: ClassifiedChanges,
    version_tag: str,
    config: ReleaseNotesConfig | None = None,
) -> str:
    """Render markdown release notes.

    Args:
        changes: Classified change descriptions
        version_tag: Tag being released (e.g. ``v1.3.0``)
        config: Section headings and tag message settings

    Returns:
        Markdown document ending with a newline
    """
    config = config or ReleaseNotesConfig()

    lines = [f"## Release {version_tag}", ""]

    sections = (
        (config.breaking_heading, changes.breaking),
        (config.features_heading, changes.features),
        (config.fixes_heading, changes.fixes),
    )
    for heading, entries in sections:
        if not entries:
            continue
        lines.append(f"### {heading}")
        lines.extend(f"- {entry}" for entry in entries)

    return "\n".join(lines) + "\n"


def render_tag_message(
    changes: ClassifiedChanges,
    version_tag: str,
    config: ReleaseNotesConfig | None = None,
) -> str:
    """Return the tag annotation: release notes, or a fixed one-liner when disabled."""
    config = config or ReleaseNotesConfig()
    if config.enabled:
        return generate_release_notes(changes, version_tag, config)
    return config.tag_message.format(version=version_tag)
