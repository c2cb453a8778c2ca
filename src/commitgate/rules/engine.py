# SPDX-License-Identifier: MIT
"""Rule engine: runs the enabled rules of a registry against commit messages."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from commitgate.rules.base import Applicability, RuleSeverity, Violation
from commitgate.rules.context import CommitMessage, parse_message
from commitgate.rules.ignores import evaluate_ignores

if TYPE_CHECKING:
    from commitgate.rules.config import LintConfig
    from commitgate.rules.registry import RuleRegistry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintResult:
    """Outcome of linting one message. Immutable once created."""

    input: CommitMessage
    errors: tuple[Violation, ...] = ()
    warnings: tuple[Violation, ...] = ()
    ignored: bool = False
    diagnostics: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        """True iff no violation has error severity."""
        return not self.errors


def evaluate(message: CommitMessage, registry: RuleRegistry) -> LintResult:
    """Run every enabled rule and collect all violations.

    ``always`` fires when the rule's condition does not hold, ``never`` fires
    when it does. Rules reporting themselves not applicable never fire.
    """
    errors: list[Violation] = []
    warnings: list[Violation] = []
    for rule, spec in registry.enabled():
        outcome = rule.check(message, spec.value)
        if not outcome.applicable:
            continue
        fires = outcome.holds if spec.applicability is Applicability.NEVER else not outcome.holds
        if not fires:
            continue
        requirement = rule.requirement(spec.applicability, spec.value)
        text = f"{requirement}, {outcome.description}" if outcome.description else requirement
        violation = Violation(
            rule_name=spec.name,
            severity=spec.severity,
            message=text,
            evidence=outcome.evidence,
        )
        if spec.severity is RuleSeverity.ERROR:
            errors.append(violation)
        else:
            warnings.append(violation)
    return LintResult(input=message, errors=tuple(errors), warnings=tuple(warnings))


class RuleEngine:
    """Runs the full pipeline: ignore filter, parser, rule evaluation."""

    def __init__(self, config: LintConfig) -> None:
        self.config = config

    def evaluate(self, message: CommitMessage) -> LintResult:
        return evaluate(message, self.config.registry)

    def lint(self, raw: str) -> LintResult:
        """Lint one raw commit message."""
        decision = evaluate_ignores(
            raw,
            self.config.ignores,
            default_ignores=self.config.default_ignores,
        )
        message = parse_message(raw)
        if decision.ignored:
            return LintResult(input=message, ignored=True, diagnostics=decision.diagnostics)
        result = self.evaluate(message)
        if decision.diagnostics:
            result = dataclasses.replace(result, diagnostics=decision.diagnostics)
        return result

    def lint_many(self, raws: Iterable[str], *, workers: int | None = None) -> list[LintResult]:
        """Lint several messages, in input order.

        Messages share nothing but the read-only registry, so with
        ``workers`` > 1 they are linted on a thread pool.
        """
        messages = list(raws)
        if not workers or workers <= 1 or len(messages) <= 1:
            return [self.lint(raw) for raw in messages]
        log.debug("Linting %d messages on %d workers", len(messages), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="commitgate-lint") as pool:
            return list(pool.map(self.lint, messages))

    @staticmethod
    def check_gate(results: Iterable[LintResult]) -> bool:
        """Return True if any result is invalid. Warnings never fail the gate."""
        return any(not r.valid for r in results)
