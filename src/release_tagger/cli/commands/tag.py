"""Implementation of the 'tag' command.

The tag command releases the pull request that triggered the workflow.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.panel import Panel

from release_tagger.config import load_config
from release_tagger.core.release import ReleaseResult, ReleaseRunner
from release_tagger.exceptions import ReleaseTaggerError
from release_tagger.forge import ActionContext, GitHubClient
from release_tagger.vcs import GitRepository

if TYPE_CHECKING:
    from release_tagger.cli.reporter import ActionsReporter


def run_tag(
    path: str | None,
    execute: bool,
    token: str | None,
    overrides: dict[str, Any],
    reporter: ActionsReporter,
    environ: Mapping[str, str] | None = None,
) -> ReleaseResult:
    """Run the tag command.

    Args:
        path: Optional path to the repository working tree
        execute: Whether to actually create the tag
        token: GitHub access token
        overrides: Nested configuration values from command-line options
        reporter: Output channel (console and workflow commands)
        environ: Environment to read the event context from
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration and event context
    try:
        config = load_config(project_path, overrides)
        context = ActionContext.from_env(environ)
    except ReleaseTaggerError as e:
        reporter.error(str(e))
        raise SystemExit(1) from e

    runner = ReleaseRunner(
        config=config,
        repo=GitRepository(project_path),
        forge=GitHubClient(token or "", context.repository, config.github.api_url),
        context=context,
        reporter=reporter,
    )

    try:
        result = runner.run(execute=execute)
    except Exception as e:
        reporter.error(str(e) or "Unknown error")
        raise SystemExit(1) from e

    if not result.is_success or result.plan is None:
        reporter.error(result.error_message or "Unknown error")
        raise SystemExit(1)

    plan = result.plan
    reporter.set_output("version", str(plan.next_version))
    reporter.set_output("tag", plan.tag)
    reporter.set_output("increment", str(plan.increment))

    if not execute:
        reporter.console.print(
            Panel(
                "[bold]Would create:[/]\n\n"
                f"  • Tag [cyan]{plan.tag}[/] at [cyan]{plan.target_sha or 'HEAD'}[/]\n"
                f"  • Ref [cyan]refs/tags/{plan.tag}[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        reporter.console.print("\n[dim]Run with [cyan]--execute[/] to create the tag.[/]")
        return result

    reporter.set_output("tag-sha", result.tag_sha or "")
    return result
