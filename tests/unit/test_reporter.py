"""Tests for console and GitHub Actions output."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from rich.console import Console

from release_tagger.cli.reporter import ActionsReporter

if TYPE_CHECKING:
    from pathlib import Path


def make_reporter(environ: dict[str, str]) -> tuple[ActionsReporter, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    reporter = ActionsReporter(
        console=Console(file=out, width=120),
        err_console=Console(file=err, width=120),
        environ=environ,
    )
    return reporter, out, err


class TestActionsMode:
    """Output inside a GitHub Actions runner."""

    def test_block_is_grouped(self):
        reporter, out, _ = make_reporter({"GITHUB_ACTIONS": "true"})

        reporter.block("Release notes for v1.3.0", "## Release v1.3.0\n\n- add export button\n")

        assert out.getvalue() == (
            "::group::Release notes for v1.3.0\n## Release v1.3.0\n\n- add export button\n::endgroup::\n"
        )

    def test_emoji_codes_printed_verbatim(self):
        reporter, out, _ = make_reporter({"GITHUB_ACTIONS": "true"})

        reporter.info("Next Application Version: v1.3.0 :rocket:")
        reporter.block("notes", "- add :sparkles: icon")

        assert ":rocket:" in out.getvalue()
        assert "- add :sparkles: icon" in out.getvalue()
        assert "✨" not in out.getvalue()

    def test_error_escapes_newlines(self):
        reporter, out, err = make_reporter({"GITHUB_ACTIONS": "true"})

        reporter.error("first\nsecond 100%")

        assert out.getvalue() == "::error::first%0Asecond 100%25\n"
        assert err.getvalue() == ""


class TestConsoleMode:
    """Output outside of Actions."""

    def test_block_keeps_text(self):
        reporter, out, _ = make_reporter({})

        reporter.block("[notes]", "- add :sparkles: icon [beta]")

        assert "- add :sparkles: icon [beta]" in out.getvalue()
        assert "[notes]" in out.getvalue()
        assert "::group::" not in out.getvalue()

    def test_error_goes_to_stderr(self):
        reporter, out, err = make_reporter({})

        reporter.error("tag [v1] :x: exists")

        assert out.getvalue() == ""
        assert "Error: tag [v1] :x: exists" in err.getvalue()


class TestSetOutput:
    """Tests for ActionsReporter.set_output()."""

    def test_single_line(self, tmp_path: Path):
        output = tmp_path / "output.txt"
        reporter, _, _ = make_reporter({"GITHUB_OUTPUT": str(output)})

        reporter.set_output("tag", "v1.3.0")
        reporter.set_output("tag-sha", "tagobj789")

        assert output.read_text() == "tag=v1.3.0\ntag-sha=tagobj789\n"

    def test_multi_line_uses_delimiter(self, tmp_path: Path):
        output = tmp_path / "output.txt"
        reporter, _, _ = make_reporter({"GITHUB_OUTPUT": str(output)})

        reporter.set_output("notes", "line one\nline two")

        lines = output.read_text().splitlines()
        assert lines[0].startswith("notes<<ghadelimiter_")
        assert lines[1:3] == ["line one", "line two"]
        assert lines[3] == lines[0].split("<<", 1)[1]

    def test_without_output_file(self):
        reporter, out, _ = make_reporter({})

        reporter.set_output("tag", "v1.3.0")

        assert out.getvalue() == ""
