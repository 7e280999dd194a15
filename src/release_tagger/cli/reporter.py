"""Console output that also speaks GitHub Actions workflow commands.

Outside of Actions everything is printed with rich. Inside Actions the
failure signal becomes an ``::error::`` annotation, long blocks are folded
into ``::group::`` sections and step outputs are appended to the file named
by ``GITHUB_OUTPUT``.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text


def _escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.console = console or Console(highlight=False, emoji=False)
        self.err_console = err_console or Console(stderr=True, highlight=False, emoji=False)
        self.environ = os.environ if environ is None else environ

    @property
    def in_actions(self) -> bool:
        return self.environ.get("GITHUB_ACTIONS") == "true"

    def info(self, message: str) -> None:
        self.console.print(message, markup=False, emoji=False, soft_wrap=True)

    def block(self, title: str, body: str) -> None:
        if self.in_actions:
            self.console.print(f"::group::{title}", markup=False, emoji=False, soft_wrap=True)
            self.console.print(body.rstrip("\n"), markup=False, emoji=False, soft_wrap=True)
            self.console.print("::endgroup::", markup=False, emoji=False, soft_wrap=True)
        else:
            self.console.print(Panel(Text(body.rstrip("\n")), title=Text(title), border_style="cyan"))

    def error(self, message: str) -> None:
        """Emit the failure signal."""
        if self.in_actions:
            self.console.print(
                f"::error::{_escape_command_data(message)}", markup=False, emoji=False, soft_wrap=True
            )
        else:
            self.err_console.print(f"[red]Error:[/] {escape(message)}", emoji=False)

    def set_output(self, name: str, value: str) -> None:
        """Append a step output when running inside Actions."""
        output_path = self.environ.get("GITHUB_OUTPUT")
        if not output_path:
            return
        with Path(output_path).open("a", encoding="utf-8") as fh:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")
