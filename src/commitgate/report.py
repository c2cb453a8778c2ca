# SPDX-License-Identifier: MIT
"""Report rendering: text, JSON, and markdown views of lint results.

Formatters never change a LintResult; they only render it. Echoed commit
text is attacker-controllable (anyone can push a commit), so every user
string is cleaned before it reaches a terminal or a PR comment.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import navi_sanitize
import nh3

from commitgate.rules.base import ConfigurationError, RuleSeverity, Violation
from commitgate.rules.engine import LintResult


@dataclass(frozen=True)
class RenderedReport:
    """Rendered output: display text plus a JSON-serializable structure."""

    text: str
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class Formatter(Protocol):
    """A rendering capability for lint results."""

    name: str

    def format(self, result: LintResult, *, help_url: str | None = None) -> RenderedReport: ...

    def format_many(
        self, results: Sequence[LintResult], *, help_url: str | None = None
    ) -> RenderedReport: ...


# --- Structured data ---


def _violation_to_dict(v: Violation) -> dict[str, Any]:
    return {
        "rule": v.rule_name,
        "level": int(v.severity),
        "severity": v.severity.name.lower(),
        "message": v.message,
        "evidence": v.evidence,
    }


def result_to_dict(result: LintResult) -> dict[str, Any]:
    """Stable structured form of one result."""
    return {
        "valid": result.valid,
        "ignored": result.ignored,
        "input": result.input.raw,
        "header": result.input.header,
        "errors": [_violation_to_dict(v) for v in result.errors],
        "warnings": [_violation_to_dict(v) for v in result.warnings],
        "diagnostics": list(result.diagnostics),
    }


def _summary_data(results: Sequence[LintResult]) -> dict[str, Any]:
    return {
        "valid": all(r.valid for r in results),
        "errorCount": sum(len(r.errors) for r in results),
        "warningCount": sum(len(r.warnings) for r in results),
        "results": [result_to_dict(r) for r in results],
    }


# --- Text (default) ---

_SIGNS = {
    RuleSeverity.ERROR: "✖",
    RuleSeverity.WARNING: "⚠",
}
_INPUT_SIGN = "⧗"
_OK_SIGN = "✔"
_INFO_SIGN = "ⓘ"


def _clean(text: str) -> str:
    """Strip invisible, bidi, and homoglyph tricks from user-derived text."""
    return navi_sanitize.clean(text)


class TextFormatter:
    """Terminal rendering: input line, one line per problem, summary, help link."""

    name = "default"

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose = verbose

    def format(self, result: LintResult, *, help_url: str | None = None) -> RenderedReport:
        data = result_to_dict(result)
        lines: list[str] = []
        problems = bool(result.errors or result.warnings)

        if result.ignored:
            if self.verbose:
                lines.append(f"{_INFO_SIGN}   message ignored: {_clean(result.input.header)}")
        elif problems or self.verbose:
            lines.append(f"{_INPUT_SIGN}   input: {_clean(result.input.header)}")
            for v in (*result.errors, *result.warnings):
                lines.append(f"{_SIGNS[v.severity]}   {_clean(v.message)} [{v.rule_name}]")
            lines.append("")
            if result.errors:
                sign = _SIGNS[RuleSeverity.ERROR]
            elif result.warnings:
                sign = _SIGNS[RuleSeverity.WARNING]
            else:
                sign = _OK_SIGN
            lines.append(
                f"{sign}   found {len(result.errors)} problems, {len(result.warnings)} warnings"
            )
            if not result.valid and help_url:
                lines.append(f"{_INFO_SIGN}   Get help: {help_url}")

        for diagnostic in result.diagnostics:
            lines.append(f"{_SIGNS[RuleSeverity.WARNING]}   {_clean(diagnostic)}")

        return RenderedReport(text="\n".join(lines), data=data)

    def format_many(
        self, results: Sequence[LintResult], *, help_url: str | None = None
    ) -> RenderedReport:
        blocks = [self.format(r, help_url=help_url).text for r in results]
        return RenderedReport(
            text="\n\n".join(b for b in blocks if b),
            data=_summary_data(results),
        )


# --- JSON ---


class JsonFormatter:
    """Machine-readable rendering; ``text`` is the JSON encoding of ``data``."""

    name = "json"

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose = verbose

    def format(self, result: LintResult, *, help_url: str | None = None) -> RenderedReport:
        data = result_to_dict(result)
        if not result.valid and help_url:
            data["helpUrl"] = help_url
        return RenderedReport(text=json.dumps(data, indent=2), data=data)

    def format_many(
        self, results: Sequence[LintResult], *, help_url: str | None = None
    ) -> RenderedReport:
        data = _summary_data(results)
        if not data["valid"] and help_url:
            data["helpUrl"] = help_url
        return RenderedReport(text=json.dumps(data, indent=2), data=data)


# --- Markdown (CI comments) ---

# Dangerous URL schemes in markdown link syntax: not covered by nh3
# since [text](javascript:...) is markdown, not HTML.
_DANGEROUS_SCHEME_RE = re.compile(
    r"(?:javascript|data|vbscript)\s*:",
    re.IGNORECASE,
)

_MD_SEVERITY = {
    RuleSeverity.ERROR: "❌",
    RuleSeverity.WARNING: "⚠️",
}


def _sanitize_markdown(text: str) -> str:
    """Strip all HTML tags and neutralize dangerous link schemes."""
    text = nh3.clean(_clean(text), tags=set())
    text = _DANGEROUS_SCHEME_RE.sub("", text)
    return text.replace("`", "'")


class MarkdownFormatter:
    """Markdown rendering for posting lint results as a PR comment."""

    name = "markdown"

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose = verbose

    def _section(self, result: LintResult) -> list[str]:
        header = _sanitize_markdown(result.input.header)
        if result.ignored:
            return [f"- ⏭️ `{header}` (ignored)"] if self.verbose else []
        violations = (*result.errors, *result.warnings)
        if not violations and not self.verbose:
            return []
        status = "✅" if result.valid else "❌"
        lines = [f"- {status} `{header}`"]
        for v in violations:
            lines.append(
                f"  - {_MD_SEVERITY[v.severity]} **{v.rule_name}**: {_sanitize_markdown(v.message)}"
            )
        return lines

    def format(self, result: LintResult, *, help_url: str | None = None) -> RenderedReport:
        return self.format_many([result], help_url=help_url)

    def format_many(
        self, results: Sequence[LintResult], *, help_url: str | None = None
    ) -> RenderedReport:
        data = _summary_data(results)
        verdict = "PASS" if data["valid"] else "FAIL"
        emoji = "✅" if data["valid"] else "❌"

        lines: list[str] = [f"## {emoji} Commit Lint — {verdict}", ""]
        lines.append(
            f"**Commits: {len(results)}** | **Problems: {data['errorCount']}**"
            f" | **Warnings: {data['warningCount']}**"
        )
        lines.append("")
        for result in results:
            lines.extend(self._section(result))
        diagnostics = [d for r in results for d in r.diagnostics]
        if diagnostics:
            lines.append("")
            for d in diagnostics:
                lines.append(f"> ⚠️ {_sanitize_markdown(d)}")
        if not data["valid"] and help_url:
            lines.append("")
            lines.append(f"[Get help]({_DANGEROUS_SCHEME_RE.sub('', help_url)})")
        lines.append("")
        lines.append("<!-- commitgate-summary -->")
        return RenderedReport(text="\n".join(lines), data=data)


FORMATTERS: dict[str, type[TextFormatter] | type[JsonFormatter] | type[MarkdownFormatter]] = {
    "default": TextFormatter,
    "@commitlint/format": TextFormatter,
    "json": JsonFormatter,
    "markdown": MarkdownFormatter,
}


def get_formatter(name: str, *, verbose: bool = False) -> Formatter:
    """Instantiate the formatter registered under *name*.

    Raises:
        ConfigurationError: If *name* is not a known formatter.
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        msg = f"unknown formatter {name!r}. Valid formatters: {sorted(FORMATTERS)}"
        raise ConfigurationError(msg, key="formatter")
    return cls(verbose=verbose)
