# SPDX-License-Identifier: MIT
"""Rule severity, applicability, result dataclasses, and the Rule protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from commitgate.rules.context import CommitMessage


class ConfigurationError(ValueError):
    """Raised when a configuration layer cannot be turned into a usable registry."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        self.key = key
        super().__init__(f"{key}: {message}" if key else message)


class RuleSeverity(IntEnum):
    """Severity levels for rule violations, encoded ordinally."""

    OFF = 0
    WARNING = 1
    ERROR = 2

    @classmethod
    def coerce(cls, raw: Any) -> RuleSeverity:
        """Accept 0/1/2 or a symbolic name ("off", "warn", "warning", "error")."""
        if isinstance(raw, RuleSeverity):
            return raw
        if isinstance(raw, bool):
            msg = f"severity must be 0, 1, 2 or a level name, got {raw!r}"
            raise ValueError(msg)
        if isinstance(raw, int) and raw in cls._value2member_map_:
            return cls(raw)
        if isinstance(raw, str):
            name = _SEVERITY_ALIASES.get(raw.strip().lower())
            if name is not None:
                return name
        msg = f"severity must be 0, 1, 2 or a level name, got {raw!r}"
        raise ValueError(msg)


_SEVERITY_ALIASES: dict[str, RuleSeverity] = {
    "off": RuleSeverity.OFF,
    "warn": RuleSeverity.WARNING,
    "warning": RuleSeverity.WARNING,
    "error": RuleSeverity.ERROR,
}


class Applicability(str, Enum):
    """Polarity of a rule: the condition must hold (always) or must not (never)."""

    ALWAYS = "always"
    NEVER = "never"


class ValueKind(str, Enum):
    """Shape of the value payload a rule accepts."""

    NONE = "none"  # no value
    ENUM = "enum"  # non-empty list of unique strings
    LENGTH = "length"  # positive integer
    CASE = "case"  # "lower-case" | "upper-case"
    TEXT = "text"  # non-empty string


@dataclass(frozen=True)
class RuleOutcome:
    """What a rule check observed about a message."""

    holds: bool
    description: str
    evidence: str | None = None
    applicable: bool = True


NOT_APPLICABLE = RuleOutcome(holds=True, description="", applicable=False)


@dataclass(frozen=True)
class Violation:
    """A single rule violation produced by the evaluator."""

    rule_name: str
    severity: RuleSeverity
    message: str
    evidence: str | None = None


@runtime_checkable
class Rule(Protocol):
    """Protocol that every commit rule must satisfy.

    ``check`` must be pure: no I/O, no shared state.
    """

    name: str
    description: str
    value_kind: ValueKind

    def check(self, message: CommitMessage, value: Any) -> RuleOutcome: ...

    def requirement(self, applicability: Applicability, value: Any) -> str: ...


def must(applicability: Applicability) -> str:
    """Return the modal verb for a requirement phrase under the given polarity."""
    return "must" if applicability is Applicability.ALWAYS else "must not"
