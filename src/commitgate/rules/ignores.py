# SPDX-License-Identifier: MIT
"""Ignore filter: predicates that exempt a raw message from linting."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

log = logging.getLogger(__name__)


@runtime_checkable
class IgnorePredicate(Protocol):
    """A boolean test on raw message text."""

    @property
    def name(self) -> str: ...

    def matches(self, raw: str) -> bool: ...


@dataclass(frozen=True)
class ExactIgnore:
    """Matches when the raw message equals ``text`` exactly."""

    text: str

    @property
    def name(self) -> str:
        return f"equals {self.text!r}"

    def matches(self, raw: str) -> bool:
        return raw == self.text


@dataclass(frozen=True)
class PatternIgnore:
    """Matches when ``pattern`` is found anywhere in the raw message (``re.search``)."""

    pattern: re.Pattern[str]
    label: str | None = None

    @classmethod
    def compile(cls, pattern: str, flags: int = 0, label: str | None = None) -> PatternIgnore:
        return cls(re.compile(pattern, flags), label)

    @property
    def name(self) -> str:
        return self.label or f"pattern {self.pattern.pattern!r}"

    def matches(self, raw: str) -> bool:
        return self.pattern.search(raw) is not None


@dataclass(frozen=True)
class CallableIgnore:
    """Wraps a user function. The function should be pure."""

    func: Callable[[str], bool]
    label: str = "custom"

    @property
    def name(self) -> str:
        return self.label

    def matches(self, raw: str) -> bool:
        return bool(self.func(raw))


# Merge, revert, fixup and release commits are generated by tooling, not people.
DEFAULT_IGNORES: tuple[IgnorePredicate, ...] = (
    PatternIgnore.compile(
        r"^((Merge pull request( #\d+ from .*)?)|(Merge (.*?) into (.*?)|(Merge branch (.*?)))(?:\r?\n)*$)",
        re.MULTILINE,
        label="merge commit",
    ),
    PatternIgnore.compile(r"^(Merge tag (.*?))(?:\r?\n)*$", re.MULTILINE, label="merge tag"),
    PatternIgnore.compile(r"^(R|r)evert (.*)", label="revert commit"),
    PatternIgnore.compile(r"^(amend|fixup|squash)!", label="fixup commit"),
    PatternIgnore.compile(
        r"\A(?:chore\(release\): )?v?\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?[ \t]*(?:\r?\n|\Z)",
        label="release version",
    ),
    PatternIgnore.compile(r"^(Merged (.*?)(in|into) (.*)|Merged PR (.*): (.*))", label="merged"),
    PatternIgnore.compile(r"^Merge remote-tracking branch(\s*)(.*)", label="merge remote-tracking branch"),
    PatternIgnore.compile(r"^Automatic merge(.*)", label="automatic merge"),
    PatternIgnore.compile(r"^Auto-merged (.*?) into (.*)", label="auto-merged"),
)


@dataclass(frozen=True)
class IgnoreDecision:
    """Outcome of running the ignore filter over one message."""

    ignored: bool
    matched: str | None = None
    diagnostics: tuple[str, ...] = ()


def evaluate_ignores(
    raw: str,
    predicates: Sequence[IgnorePredicate] = (),
    *,
    default_ignores: bool = True,
    defaults: Sequence[IgnorePredicate] = DEFAULT_IGNORES,
) -> IgnoreDecision:
    """Run user predicates in order, then the defaults; stop at the first match.

    A predicate that raises counts as non-matching. The failure is logged and
    returned as a diagnostic so a broken custom predicate never blocks linting.
    """
    chain: list[IgnorePredicate] = list(predicates)
    if default_ignores:
        chain.extend(defaults)

    diagnostics: list[str] = []
    for predicate in chain:
        try:
            hit = predicate.matches(raw)
        except Exception as exc:
            diagnostic = f"ignore predicate {predicate.name} failed: {type(exc).__name__}: {exc}"
            log.warning("%s", diagnostic)
            diagnostics.append(diagnostic)
            continue
        if hit:
            log.debug("Message ignored by %s", predicate.name)
            return IgnoreDecision(ignored=True, matched=predicate.name, diagnostics=tuple(diagnostics))
    return IgnoreDecision(ignored=False, diagnostics=tuple(diagnostics))


def should_ignore(
    raw: str,
    predicates: Sequence[IgnorePredicate] = (),
    default_ignores_enabled: bool = True,
) -> bool:
    """Return True if any predicate matches *raw*."""
    return evaluate_ignores(raw, predicates, default_ignores=default_ignores_enabled).ignored
