# SPDX-License-Identifier: MIT
"""Header rules: header-max-length, header-min-length."""

from __future__ import annotations

from commitgate.rules.base import Applicability, RuleOutcome, ValueKind
from commitgate.rules.context import CommitMessage


class HeaderMaxLengthRule:
    """Condition: the header is at most ``value`` characters long."""

    name = "header-max-length"
    description = "Limit header length"
    value_kind = ValueKind.LENGTH

    def check(self, message: CommitMessage, value: int) -> RuleOutcome:
        length = len(message.header)
        return RuleOutcome(
            holds=length <= value,
            description=f"current length is {length}",
            evidence=message.header[value:] or None,
        )

    def requirement(self, applicability: Applicability, value: int) -> str:
        if applicability is Applicability.ALWAYS:
            return f"header must not be longer than {value} characters"
        return f"header must be longer than {value} characters"


class HeaderMinLengthRule:
    """Condition: the header is at least ``value`` characters long."""

    name = "header-min-length"
    description = "Require a minimum header length"
    value_kind = ValueKind.LENGTH

    def check(self, message: CommitMessage, value: int) -> RuleOutcome:
        length = len(message.header)
        return RuleOutcome(holds=length >= value, description=f"current length is {length}")

    def requirement(self, applicability: Applicability, value: int) -> str:
        if applicability is Applicability.ALWAYS:
            return f"header must not be shorter than {value} characters"
        return f"header must be shorter than {value} characters"
