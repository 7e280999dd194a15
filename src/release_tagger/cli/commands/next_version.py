"""Implementation of the 'next-version' command.

Previews the release for a commit message locally: no GitHub access, no
``git fetch`` and nothing is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from release_tagger.config import load_config
from release_tagger.core.changelog import generate_release_notes
from release_tagger.core.commits import CommitClassifier
from release_tagger.core.version import Version
from release_tagger.exceptions import ReleaseTaggerError
from release_tagger.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_next_version(
    message: str,
    current: str | None,
    path: str | None,
    overrides: dict[str, Any],
    show_notes: bool,
    console: Console,
    err_console: Console,
) -> str:
    """Print the tag that ``message`` would produce.

    Args:
        message: Commit message to classify
        current: Current version tag; read from the local repository if omitted
        path: Optional path to the repository working tree
        overrides: Nested configuration values from command-line options
        show_notes: Also print the rendered release notes
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The next version tag
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path, overrides)
        changes = CommitClassifier.from_config(config.commits).classify(message)
        increment = changes.require_increment()

        if current is None:
            current = GitRepository(project_path).get_current_version_tag(
                config.version.source,
                config.tag_pattern,
                config.default_tag,
            )

        prefix = config.effective_tag_prefix
        tag = Version.parse(current, prefix).bump(increment).to_tag(prefix)
    except ReleaseTaggerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}", emoji=False)
        raise SystemExit(1) from e

    console.print(tag, markup=False, emoji=False, highlight=False)
    if show_notes:
        console.print()
        console.print(
            generate_release_notes(changes, tag, config.notes).rstrip("\n"),
            markup=False,
            emoji=False,
            highlight=False,
        )
    return tag
