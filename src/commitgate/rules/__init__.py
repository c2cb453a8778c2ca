# SPDX-License-Identifier: MIT
"""Commit lint rule engine: parse, ignore-check, evaluate."""

from commitgate.rules.base import (
    Applicability,
    ConfigurationError,
    Rule,
    RuleOutcome,
    RuleSeverity,
    ValueKind,
    Violation,
)
from commitgate.rules.config import (
    ConfigLayer,
    LintConfig,
    build_config,
    load_config,
    resolve_layers,
)
from commitgate.rules.context import CommitMessage, Footer, parse_message
from commitgate.rules.engine import LintResult, RuleEngine, evaluate
from commitgate.rules.ignores import (
    DEFAULT_IGNORES,
    CallableIgnore,
    ExactIgnore,
    IgnorePredicate,
    PatternIgnore,
    should_ignore,
)
from commitgate.rules.registry import (
    RuleCatalog,
    RuleRegistry,
    RuleSpec,
    build_registry,
    default_catalog,
)

__all__ = [
    "DEFAULT_IGNORES",
    "Applicability",
    "CallableIgnore",
    "CommitMessage",
    "ConfigLayer",
    "ConfigurationError",
    "ExactIgnore",
    "Footer",
    "IgnorePredicate",
    "LintConfig",
    "LintResult",
    "PatternIgnore",
    "Rule",
    "RuleCatalog",
    "RuleEngine",
    "RuleOutcome",
    "RuleRegistry",
    "RuleSeverity",
    "RuleSpec",
    "ValueKind",
    "Violation",
    "build_config",
    "build_registry",
    "default_catalog",
    "evaluate",
    "load_config",
    "parse_message",
    "resolve_layers",
    "should_ignore",
]


def lint_message(raw: str, config: LintConfig) -> LintResult:
    """Convenience: run the full pipeline on one raw message."""
    return RuleEngine(config).lint(raw)


def check_gate(results: list[LintResult]) -> bool:
    """Convenience: True if any result is invalid."""
    return RuleEngine.check_gate(results)
