"""Command-line entry point.

Options can also be supplied as GitHub Action inputs: the runner exposes an
input named ``gh-token`` as the ``INPUT_GH-TOKEN`` environment variable,
which is read here directly.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

import typer
from rich.console import Console

from release_tagger import __version__
from release_tagger.cli.commands.next_version import run_next_version
from release_tagger.cli.commands.tag import run_tag
from release_tagger.cli.reporter import ActionsReporter

app = typer.Typer(
    name="release-tagger",
    help="Tag releases from conventional commit messages.",
    no_args_is_help=True,
)


def _split_prefixes(value: Optional[str]) -> Optional[list[str]]:
    # A blank Action input means "not given", not "no prefixes".
    prefixes = [p.strip() for p in (value or "").split(",") if p.strip()]
    return prefixes or None


def build_overrides(
    minor_prefixes: Optional[str] = None,
    patch_prefixes: Optional[str] = None,
    strategy: Optional[str] = None,
    version_source: Optional[str] = None,
    notes: Optional[bool] = None,
    require_merged: Optional[bool] = None,
) -> dict[str, Any]:
    """Map command-line options onto the nested configuration layout."""
    return {
        "commits": {
            "types_minor": _split_prefixes(minor_prefixes),
            "types_patch": _split_prefixes(patch_prefixes),
        },
        "version": {"source": version_source or None},
        "release": {"strategy": strategy or None, "require_merged": require_merged},
        "notes": {"enabled": notes},
    }


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"release-tagger {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    pass


MINOR_PREFIXES_OPTION = typer.Option(
    None, "--minor-prefixes", envvar="INPUT_MINOR-PREFIXES", help="Comma-separated prefixes for minor changes"
)
PATCH_PREFIXES_OPTION = typer.Option(
    None, "--patch-prefixes", envvar="INPUT_PATCH-PREFIXES", help="Comma-separated prefixes for patch changes"
)
VERSION_SOURCE_OPTION = typer.Option(
    None, "--version-source", envvar="INPUT_VERSION-SOURCE", help="Current version from 'latest' tag or 'nearest' tag"
)
PATH_OPTION = typer.Option(None, "--path", help="Repository working tree (default: current directory)")


@app.command("tag", help="Release the merged pull request that triggered the workflow")
def tag_command(
    path: Optional[str] = PATH_OPTION,
    token: Optional[str] = typer.Option(
        None, "--token", envvar=["INPUT_GH-TOKEN", "GITHUB_TOKEN"], help="GitHub access token", show_default=False
    ),
    execute: bool = typer.Option(
        False, "--execute/--dry-run", envvar="INPUT_EXECUTE", help="Create the tag (default is a dry run)"
    ),
    minor_prefixes: Optional[str] = MINOR_PREFIXES_OPTION,
    patch_prefixes: Optional[str] = PATCH_PREFIXES_OPTION,
    strategy: Optional[str] = typer.Option(
        None, "--strategy", envvar="INPUT_STRATEGY", help="'merge' reads the merge commit, 'squash' the single PR commit"
    ),
    version_source: Optional[str] = VERSION_SOURCE_OPTION,
    notes: Optional[bool] = typer.Option(
        None, "--notes/--no-notes", envvar="INPUT_RELEASE-NOTES", help="Annotate the tag with release notes"
    ),
    require_merged: Optional[bool] = typer.Option(
        None, "--require-merged/--allow-unmerged", help="Refuse to release unmerged pull requests"
    ),
) -> None:
    overrides = build_overrides(
        minor_prefixes=minor_prefixes,
        patch_prefixes=patch_prefixes,
        strategy=strategy,
        version_source=version_source,
        notes=notes,
        require_merged=require_merged,
    )
    run_tag(path=path, execute=execute, token=token, overrides=overrides, reporter=ActionsReporter())


@app.command("next-version", help="Preview the next version for a commit message")
def next_version_command(
    message: Optional[str] = typer.Argument(None, help="Commit message (read from stdin if omitted or '-')"),
    current: Optional[str] = typer.Option(
        None, "--current", help="Current version tag (default: read from the local repository)"
    ),
    path: Optional[str] = PATH_OPTION,
    minor_prefixes: Optional[str] = MINOR_PREFIXES_OPTION,
    patch_prefixes: Optional[str] = PATCH_PREFIXES_OPTION,
    version_source: Optional[str] = VERSION_SOURCE_OPTION,
    notes: bool = typer.Option(False, "--notes", help="Also print the release notes"),
) -> None:
    if message is None or message == "-":
        message = sys.stdin.read()
    overrides = build_overrides(
        minor_prefixes=minor_prefixes,
        patch_prefixes=patch_prefixes,
        version_source=version_source,
    )
    run_next_version(
        message=message,
        current=current,
        path=path,
        overrides=overrides,
        show_notes=notes,
        console=Console(highlight=False, emoji=False),
        err_console=Console(stderr=True, emoji=False),
    )


if __name__ == "__main__":
    app()
