# SPDX-License-Identifier: MIT
"""Tests for commitgate.rules.ignores: ignore predicates and the default set."""

from __future__ import annotations

import logging

import pytest

from commitgate.rules.ignores import (
    DEFAULT_IGNORES,
    CallableIgnore,
    ExactIgnore,
    IgnorePredicate,
    PatternIgnore,
    evaluate_ignores,
    should_ignore,
)


class TestPredicates:
    def test_exact_matches_only_equal_text(self) -> None:
        pred = ExactIgnore("")
        assert pred.matches("") is True
        assert pred.matches(" ") is False
        assert pred.matches("feat: x") is False

    def test_pattern_searches_anywhere(self) -> None:
        pred = PatternIgnore.compile(r"\[skip lint\]")
        assert pred.matches("chore: tidy [skip lint]") is True
        assert pred.matches("chore: tidy") is False

    def test_pattern_label(self) -> None:
        assert PatternIgnore.compile("^WIP").name == "pattern '^WIP'"
        assert PatternIgnore.compile("^WIP", label="wip").name == "wip"

    def test_callable(self) -> None:
        pred = CallableIgnore(lambda raw: raw.startswith("WIP"), label="wip")
        assert pred.matches("WIP: stuff") is True
        assert pred.name == "wip"

    @pytest.mark.parametrize(
        "pred",
        [ExactIgnore(""), PatternIgnore.compile("x"), CallableIgnore(lambda raw: False)],
    )
    def test_all_satisfy_protocol(self, pred: object) -> None:
        assert isinstance(pred, IgnorePredicate)


class TestDefaultIgnores:
    @pytest.mark.parametrize(
        "raw",
        [
            "Merge branch 'main' into feature",
            "Merge branch 'main'",
            "Merge pull request #12 from org/branch",
            "Merge tag 'v1.0.0'",
            "Merge remote-tracking branch 'origin/main'",
            'Revert "feat: add thing"',
            "revert something",
            "fixup! feat: add thing",
            "squash! fix: x",
            "amend! fix: x",
            "v1.2.3",
            "1.2.3-rc.1",
            "chore(release): v1.2.3",
            "Merged PR 42: add thing",
            "Merged feature in main",
            "Automatic merge from CI",
            "Auto-merged feature into main",
        ],
    )
    def test_ignored(self, raw: str) -> None:
        assert should_ignore(raw) is True

    @pytest.mark.parametrize(
        "raw",
        [
            "feat: add merge support",
            "fix(merge): handle conflicts",
            "",
            "chore(release): prepare notes",
            "Reverted nothing",
        ],
    )
    def test_not_ignored(self, raw: str) -> None:
        assert should_ignore(raw) is False

    def test_disabled(self) -> None:
        assert should_ignore("Merge branch 'main'", default_ignores_enabled=False) is False

    def test_defaults_are_tuple(self) -> None:
        assert isinstance(DEFAULT_IGNORES, tuple)
        assert len(DEFAULT_IGNORES) == 9


class TestEvaluateIgnores:
    def test_user_predicates_run_first(self) -> None:
        decision = evaluate_ignores("Merge branch 'main'", [ExactIgnore("Merge branch 'main'")])
        assert decision.ignored is True
        assert decision.matched == "equals \"Merge branch 'main'\""

    def test_short_circuits(self) -> None:
        calls: list[str] = []

        def first(raw: str) -> bool:
            calls.append("first")
            return True

        def second(raw: str) -> bool:
            calls.append("second")
            return True

        decision = evaluate_ignores("x", [CallableIgnore(first, "first"), CallableIgnore(second, "second")])
        assert decision.matched == "first"
        assert calls == ["first"]

    def test_failing_predicate_is_non_matching(self, caplog: pytest.LogCaptureFixture) -> None:
        def boom(raw: str) -> bool:
            raise ValueError("bad input")

        with caplog.at_level(logging.WARNING, logger="commitgate.rules.ignores"):
            decision = evaluate_ignores("feat: x", [CallableIgnore(boom, "boom")])
        assert decision.ignored is False
        assert decision.diagnostics == ("ignore predicate boom failed: ValueError: bad input",)
        assert "ignore predicate boom failed" in caplog.text

    def test_failure_then_match_keeps_diagnostic(self) -> None:
        def boom(raw: str) -> bool:
            raise KeyError("k")

        decision = evaluate_ignores("", [CallableIgnore(boom, "boom"), ExactIgnore("")])
        assert decision.ignored is True
        assert len(decision.diagnostics) == 1

    def test_no_predicates_no_defaults(self) -> None:
        decision = evaluate_ignores("Merge branch 'x'", default_ignores=False)
        assert decision.ignored is False
        assert decision.matched is None
        assert decision.diagnostics == ()
