# SPDX-License-Identifier: MIT
"""Tests for the body and footer layout rules."""

from __future__ import annotations

from commitgate.rules.base import Applicability
from commitgate.rules.body_rules import (
    BodyLeadingBlankRule,
    BodyMaxLineLengthRule,
    FooterLeadingBlankRule,
    FooterMaxLineLengthRule,
)
from commitgate.rules.context import parse_message


class TestBodyLeadingBlank:
    def test_blank_line_present(self) -> None:
        assert BodyLeadingBlankRule().check(parse_message("fix: x\n\nbody"), None).holds is True

    def test_blank_line_missing(self) -> None:
        assert BodyLeadingBlankRule().check(parse_message("fix: x\nbody"), None).holds is False

    def test_no_body_not_applicable(self) -> None:
        assert BodyLeadingBlankRule().check(parse_message("fix: x"), None).applicable is False

    def test_requirement(self) -> None:
        assert (
            BodyLeadingBlankRule().requirement(Applicability.ALWAYS, None)
            == "body must have leading blank line"
        )


class TestFooterLeadingBlank:
    def test_blank_line_present(self) -> None:
        msg = parse_message("fix: x\n\nbody\n\nRefs #1")
        assert FooterLeadingBlankRule().check(msg, None).holds is True

    def test_blank_line_missing(self) -> None:
        msg = parse_message("fix: x\n\nbody\nRefs #1")
        assert FooterLeadingBlankRule().check(msg, None).holds is False

    def test_footer_right_after_header(self) -> None:
        assert FooterLeadingBlankRule().check(parse_message("fix: x\nRefs #1"), None).holds is False

    def test_no_footer_not_applicable(self) -> None:
        assert FooterLeadingBlankRule().check(parse_message("fix: x\n\nbody"), None).applicable is False


class TestMaxLineLength:
    def test_body_within_limit(self) -> None:
        msg = parse_message("fix: x\n\nshort\nlines")
        assert BodyMaxLineLengthRule().check(msg, 10).holds is True

    def test_body_over_limit(self) -> None:
        msg = parse_message("fix: x\n\nshort\n" + "y" * 12)
        outcome = BodyMaxLineLengthRule().check(msg, 10)
        assert outcome.holds is False
        assert outcome.description == "longest line is 12 characters"
        assert outcome.evidence == "y" * 12

    def test_body_absent_not_applicable(self) -> None:
        assert BodyMaxLineLengthRule().check(parse_message("fix: x"), 10).applicable is False

    def test_footer_over_limit(self) -> None:
        msg = parse_message("fix: x\n\nRefs #" + "1" * 20)
        outcome = FooterMaxLineLengthRule().check(msg, 10)
        assert outcome.holds is False
        assert outcome.description == "longest line is 26 characters"

    def test_footer_continuation_lines_measured(self) -> None:
        msg = parse_message("fix: x\n\nBREAKING CHANGE: ok\n" + "z" * 30)
        assert FooterMaxLineLengthRule().check(msg, 25).holds is False

    def test_requirement(self) -> None:
        assert (
            BodyMaxLineLengthRule().requirement(Applicability.ALWAYS, 100)
            == "body's lines must not be longer than 100 characters"
        )
        assert (
            FooterMaxLineLengthRule().requirement(Applicability.ALWAYS, 100)
            == "footer's lines must not be longer than 100 characters"
        )
