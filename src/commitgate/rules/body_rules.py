# SPDX-License-Identifier: MIT
"""Body and footer layout rules."""

from __future__ import annotations

from typing import Any

from commitgate.rules.base import NOT_APPLICABLE, Applicability, RuleOutcome, ValueKind, must
from commitgate.rules.context import CommitMessage


def _body_lines(message: CommitMessage) -> list[str]:
    return [line for paragraph in message.body for line in paragraph.split("\n")]


def _footer_lines(message: CommitMessage) -> list[str]:
    return [line for footer in message.footers for line in footer.render().split("\n")]


def _max_line_outcome(lines: list[str], limit: int) -> RuleOutcome:
    longest = max(lines, key=len)
    return RuleOutcome(
        holds=len(longest) <= limit,
        description=f"longest line is {len(longest)} characters",
        evidence=longest,
    )


class BodyLeadingBlankRule:
    """Condition: the header is followed by a blank line before the body."""

    name = "body-leading-blank"
    description = "Separate header and body with a blank line"
    value_kind = ValueKind.NONE

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome:
        if not message.body:
            return NOT_APPLICABLE
        return RuleOutcome(holds=message.has_blank_after_header, description="")

    def requirement(self, applicability: Applicability, value: Any) -> str:
        return f"body {must(applicability)} have leading blank line"


class FooterLeadingBlankRule:
    """Condition: the footer section is preceded by a blank line."""

    name = "footer-leading-blank"
    description = "Separate footers from what precedes them with a blank line"
    value_kind = ValueKind.NONE

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome:
        if not message.footers:
            return NOT_APPLICABLE
        return RuleOutcome(holds=message.has_blank_before_footer, description="")

    def requirement(self, applicability: Applicability, value: Any) -> str:
        return f"footer {must(applicability)} have leading blank line"


class BodyMaxLineLengthRule:
    """Condition: no body line is longer than ``value`` characters."""

    name = "body-max-line-length"
    description = "Limit body line length"
    value_kind = ValueKind.LENGTH

    def check(self, message: CommitMessage, value: int) -> RuleOutcome:
        lines = _body_lines(message)
        if not lines:
            return NOT_APPLICABLE
        return _max_line_outcome(lines, value)

    def requirement(self, applicability: Applicability, value: int) -> str:
        if applicability is Applicability.ALWAYS:
            return f"body's lines must not be longer than {value} characters"
        return f"body's lines must be longer than {value} characters"


class FooterMaxLineLengthRule:
    """Condition: no footer line is longer than ``value`` characters."""

    name = "footer-max-line-length"
    description = "Limit footer line length"
    value_kind = ValueKind.LENGTH

    def check(self, message: CommitMessage, value: int) -> RuleOutcome:
        lines = _footer_lines(message)
        if not lines:
            return NOT_APPLICABLE
        return _max_line_outcome(lines, value)

    def requirement(self, applicability: Applicability, value: int) -> str:
        if applicability is Applicability.ALWAYS:
            return f"footer's lines must not be longer than {value} characters"
        return f"footer's lines must be longer than {value} characters"
