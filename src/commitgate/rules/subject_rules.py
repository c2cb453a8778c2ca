# SPDX-License-Identifier: MIT
"""Subject rules: subject-empty, subject-full-stop."""

from __future__ import annotations

from typing import Any

from commitgate.rules.base import NOT_APPLICABLE, Applicability, RuleOutcome, ValueKind, must
from commitgate.rules.context import CommitMessage


class SubjectEmptyRule:
    """Condition: the subject is absent or blank (includes unparsed headers)."""

    name = "subject-empty"
    description = "Require (never) or forbid (always) a subject"
    value_kind = ValueKind.NONE

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome:
        if message.subject is None or not message.subject.strip():
            return RuleOutcome(holds=True, description="")
        return RuleOutcome(holds=False, description="", evidence=message.subject)

    def requirement(self, applicability: Applicability, value: Any) -> str:
        return f"subject {must(applicability)} be empty"


class SubjectFullStopRule:
    """Condition: the subject ends with the configured terminator."""

    name = "subject-full-stop"
    description = "Control the subject's trailing punctuation"
    value_kind = ValueKind.TEXT

    def check(self, message: CommitMessage, value: str) -> RuleOutcome:
        if message.subject is None or not message.subject.strip():
            return NOT_APPLICABLE
        subject = message.subject.rstrip()
        return RuleOutcome(holds=subject.endswith(value), description="", evidence=subject[-len(value) :])

    def requirement(self, applicability: Applicability, value: str) -> str:
        return f"subject {must(applicability)} end with full stop {value!r}"
