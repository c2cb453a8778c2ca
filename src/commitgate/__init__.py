"""commitgate: conventional-commit linting with layered rule configuration."""

from commitgate.report import (
    FORMATTERS,
    Formatter,
    JsonFormatter,
    MarkdownFormatter,
    RenderedReport,
    TextFormatter,
    get_formatter,
    result_to_dict,
)
from commitgate.rules import (
    ConfigurationError,
    LintConfig,
    LintResult,
    RuleEngine,
    build_config,
    check_gate,
    lint_message,
    load_config,
    parse_message,
)

__all__ = [
    "FORMATTERS",
    "ConfigurationError",
    "Formatter",
    "JsonFormatter",
    "LintConfig",
    "LintResult",
    "MarkdownFormatter",
    "RenderedReport",
    "RuleEngine",
    "TextFormatter",
    "build_config",
    "check_gate",
    "get_formatter",
    "lint_message",
    "load_config",
    "parse_message",
    "result_to_dict",
]
