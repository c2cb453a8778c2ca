# SPDX-License-Identifier: MIT
"""Scope rules: scope-empty, scope-enum, scope-case."""

from __future__ import annotations

import re
from typing import Any

from commitgate.rules._cases import is_case
from commitgate.rules.base import NOT_APPLICABLE, Applicability, RuleOutcome, ValueKind, must
from commitgate.rules.context import CommitMessage

# "feat(api,cli): ..." and "feat(api/cli): ..." name several scopes
_SCOPE_DELIMITER_RE = re.compile(r"\s*[/\\,]\s*")


def _is_blank(scope: str | None) -> bool:
    return scope is None or not scope.strip()


def split_scopes(scope: str) -> list[str]:
    """Split a multi-scope string into its segments."""
    return [s for s in _SCOPE_DELIMITER_RE.split(scope.strip()) if s]


class ScopeEmptyRule:
    """Condition: the scope is absent or blank."""

    name = "scope-empty"
    description = "Require (never) or forbid (always) a scope"
    value_kind = ValueKind.NONE

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome:
        if _is_blank(message.scope):
            return RuleOutcome(holds=True, description="")
        return RuleOutcome(
            holds=False,
            description=f"got {message.scope!r}",
            evidence=message.scope,
        )

    def requirement(self, applicability: Applicability, value: Any) -> str:
        return f"scope {must(applicability)} be empty"


class ScopeEnumRule:
    """Condition: every scope segment is in the allowed set.

    Blank and absent scopes are left to scope-empty.
    """

    name = "scope-enum"
    description = "Restrict scopes to a fixed set"
    value_kind = ValueKind.ENUM

    def check(self, message: CommitMessage, value: tuple[str, ...]) -> RuleOutcome:
        if message.scope is None or _is_blank(message.scope):
            return NOT_APPLICABLE
        allowed = set(value)
        segments = split_scopes(message.scope)
        return RuleOutcome(
            holds=all(s in allowed for s in segments),
            description=f"got {message.scope!r}",
            evidence=message.scope,
        )

    def requirement(self, applicability: Applicability, value: tuple[str, ...]) -> str:
        return f"scope {must(applicability)} be one of [{', '.join(value)}]"


class ScopeCaseRule:
    """Condition: every scope segment is written in the configured case."""

    name = "scope-case"
    description = "Enforce letter case of the scope"
    value_kind = ValueKind.CASE

    def check(self, message: CommitMessage, value: str) -> RuleOutcome:
        if message.scope is None or _is_blank(message.scope):
            return NOT_APPLICABLE
        return RuleOutcome(
            holds=all(is_case(s, value) for s in split_scopes(message.scope)),
            description=f"got {message.scope!r}",
            evidence=message.scope,
        )

    def requirement(self, applicability: Applicability, value: str) -> str:
        return f"scope {must(applicability)} be {value}"
