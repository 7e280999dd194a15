"""Tests for commit message classification."""

from __future__ import annotations

import pytest

from release_tagger.config.models import CommitsConfig
from release_tagger.core.commits import (
    ClassifiedChanges,
    CommitClassifier,
    build_prefix_pattern,
    classify_message,
)
from release_tagger.core.version import Increment
from release_tagger.exceptions import ClassificationError


class TestParseLine:
    """Tests for CommitClassifier.parse_line()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat line."""
        change = CommitClassifier().parse_line("feat: add new feature")

        assert change is not None
        assert change.commit_type == "feat"
        assert change.scope is None
        assert change.description == "add new feature"
        assert change.increment is Increment.MINOR
        assert not change.is_breaking

    def test_parse_with_scope(self):
        """Parse a line with a scope."""
        change = CommitClassifier().parse_line("fix(api): handle null response")

        assert change is not None
        assert change.commit_type == "fix"
        assert change.scope == "api"
        assert change.description == "handle null response"
        assert change.increment is Increment.PATCH

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Scope and ! together mark a breaking change."""
        change = CommitClassifier().parse_line("feat(core)!: change config format")

        assert change is not None
        assert change.is_breaking
        assert change.scope == "core"

    def test_parse_bullet_prefix(self):
        """Squash-merge bodies list commits as '* ' bullets."""
        change = CommitClassifier().parse_line("* fix: correct rounding")

        assert change is not None
        assert change.description == "correct rounding"

    def test_exclamation_in_description_is_breaking(self):
        """Any ! in a matched line marks it as breaking."""
        change = CommitClassifier().parse_line("fix: stop crashing!")

        assert change is not None
        assert change.is_breaking

    @pytest.mark.parametrize(
        "line",
        [
            "chore: nothing",
            "  feat: indented",
            "feat:missing space",
            "feat: ",
            "feature: not the feat prefix",
            "- feat: dash bullet",
            "Merge pull request #42 from acme/feature",
        ],
    )
    def test_non_matching_lines(self, line: str):
        assert CommitClassifier().parse_line(line) is None

    def test_prefix_in_both_lists_counts_as_feature(self):
        classifier = CommitClassifier(["change"], ["change"])
        change = classifier.parse_line("change: something")

        assert change is not None
        assert change.increment is Increment.MINOR

    def test_prefixes_are_escaped(self):
        """Regex metacharacters in prefixes match literally."""
        classifier = CommitClassifier(["feat+"], ["fix"])

        assert classifier.parse_line("feat+: literal plus") is not None
        assert classifier.parse_line("feattt: no match") is None


class TestBuildPrefixPattern:
    """Tests for build_prefix_pattern()."""

    def test_empty_prefixes(self):
        assert build_prefix_pattern([]) is None

    def test_alternatives(self):
        pattern = build_prefix_pattern(["feat", "feature"])

        assert pattern is not None
        assert pattern.match("feature: x")["type"] == "feature"


class TestClassifyMessage:
    """Tests for classify_message()."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("feat: add thing", Increment.MINOR),
            ("feat!: break thing", Increment.MAJOR),
            ("fix(scope): patch thing", Increment.PATCH),
            ("fix!: break thing", Increment.MAJOR),
            ("chore: nothing", Increment.NONE),
            ("", Increment.NONE),
        ],
    )
    def test_single_line_increment(self, message: str, expected: Increment):
        assert classify_message(message).increment is expected

    def test_highest_severity_wins(self):
        """feat plus fix! yields MAJOR and keeps both entries."""
        changes = classify_message("feat: add thing\nfix!: break thing")

        assert changes.increment is Increment.MAJOR
        assert changes.features == ("add thing",)
        assert changes.breaking == ("break thing",)
        assert changes.fixes == ()

    def test_feat_takes_precedence_over_fix(self):
        changes = classify_message("fix: one\nfeat: two")
        assert changes.increment is Increment.MINOR

    def test_merge_commit_body(self):
        """Every matching line of a merge commit is collected in order."""
        message = (
            "Merge pull request #42 from acme/feature\n"
            "\n"
            "* feat(ui): add export button\n"
            "* fix: correct totals\n"
            "* docs: update readme\n"
            "* feat: add csv format\n"
            "* fix(api)!: remove v1 endpoints\n"
        )
        changes = classify_message(message)

        assert changes.features == ("add export button", "add csv format")
        assert changes.fixes == ("correct totals",)
        assert changes.breaking == ("remove v1 endpoints",)
        assert changes.increment is Increment.MAJOR

    def test_breaking_entries_keep_message_order(self):
        """Breaking feat! and fix! lines are not grouped by prefix."""
        changes = classify_message("fix!: drop v1\nfeat!: new auth\nfix!: drop legacy token")

        assert changes.breaking == ("drop v1", "new auth", "drop legacy token")

    def test_windows_line_endings(self):
        changes = classify_message("feat: one\r\nfix: two\r\n")

        assert changes.features == ("one",)
        assert changes.fixes == ("two",)

    def test_custom_prefixes(self):
        changes = classify_message("feature: new\nbugfix: old", ["feature"], ["bugfix"])

        assert changes.features == ("new",)
        assert changes.fixes == ("old",)

    def test_default_prefixes_ignore_perf(self):
        assert classify_message("perf: faster").increment is Increment.NONE


class TestClassifyMessages:
    """Tests for CommitClassifier.classify_messages()."""

    def test_combines_messages(self):
        classifier = CommitClassifier.from_config(CommitsConfig(types_patch=["fix", "perf"]))
        changes = classifier.classify_messages(["perf: faster", "feat: new"])

        assert changes.fixes == ("faster",)
        assert changes.features == ("new",)
        assert changes.increment is Increment.MINOR

    def test_no_messages(self):
        assert CommitClassifier().classify_messages([]).is_empty


class TestRequireIncrement:
    """Tests for ClassifiedChanges.require_increment()."""

    def test_returns_increment(self):
        assert ClassifiedChanges(fixes=("x",)).require_increment() is Increment.PATCH

    def test_none_raises(self):
        with pytest.raises(ClassificationError, match="does not contain correct commit messages"):
            ClassifiedChanges().require_increment()
