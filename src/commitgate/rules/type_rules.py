# SPDX-License-Identifier: MIT
"""Type rules: type-empty, type-enum, type-case."""

from __future__ import annotations

from typing import Any

from commitgate.rules._cases import is_case
from commitgate.rules.base import NOT_APPLICABLE, Applicability, RuleOutcome, ValueKind, must
from commitgate.rules.context import CommitMessage


class TypeEmptyRule:
    """Condition: the type is absent or blank (includes unparsed headers)."""

    name = "type-empty"
    description = "Require (never) or forbid (always) a type"
    value_kind = ValueKind.NONE

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome:
        if message.type is None or not message.type.strip():
            return RuleOutcome(holds=True, description="")
        return RuleOutcome(holds=False, description=f"got {message.type!r}", evidence=message.type)

    def requirement(self, applicability: Applicability, value: Any) -> str:
        return f"type {must(applicability)} be empty"


class TypeEnumRule:
    """Condition: the type is in the allowed set."""

    name = "type-enum"
    description = "Restrict types to a fixed set"
    value_kind = ValueKind.ENUM

    def check(self, message: CommitMessage, value: tuple[str, ...]) -> RuleOutcome:
        if not message.type:
            return NOT_APPLICABLE
        return RuleOutcome(
            holds=message.type in value,
            description=f"got {message.type!r}",
            evidence=message.type,
        )

    def requirement(self, applicability: Applicability, value: tuple[str, ...]) -> str:
        return f"type {must(applicability)} be one of [{', '.join(value)}]"


class TypeCaseRule:
    """Condition: the type is written in the configured case."""

    name = "type-case"
    description = "Enforce letter case of the type"
    value_kind = ValueKind.CASE

    def check(self, message: CommitMessage, value: str) -> RuleOutcome:
        if not message.type:
            return NOT_APPLICABLE
        return RuleOutcome(
            holds=is_case(message.type, value),
            description=f"got {message.type!r}",
            evidence=message.type,
        )

    def requirement(self, applicability: Applicability, value: str) -> str:
        return f"type {must(applicability)} be {value}"
