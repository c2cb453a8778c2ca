# SPDX-License-Identifier: MIT
"""Rule catalog and rule registry: which rules exist, and how they are configured.

The catalog is the explicit list of rule classes the engine knows about.
The registry is the effective ``name -> RuleSpec`` table produced by merging
configuration layers left to right, validated against the catalog.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from commitgate.rules.base import (
    Applicability,
    ConfigurationError,
    Rule,
    RuleSeverity,
    ValueKind,
)
from commitgate.rules.body_rules import (
    BodyLeadingBlankRule,
    BodyMaxLineLengthRule,
    FooterLeadingBlankRule,
    FooterMaxLineLengthRule,
)
from commitgate.rules.header_rules import HeaderMaxLengthRule, HeaderMinLengthRule
from commitgate.rules.scope_rules import ScopeCaseRule, ScopeEmptyRule, ScopeEnumRule
from commitgate.rules.subject_rules import SubjectEmptyRule, SubjectFullStopRule
from commitgate.rules.type_rules import TypeCaseRule, TypeEmptyRule, TypeEnumRule

RULE_CLASSES: tuple[type[Rule], ...] = (
    ScopeEmptyRule,
    ScopeEnumRule,
    ScopeCaseRule,
    HeaderMaxLengthRule,
    HeaderMinLengthRule,
    TypeEmptyRule,
    TypeEnumRule,
    TypeCaseRule,
    SubjectEmptyRule,
    SubjectFullStopRule,
    BodyLeadingBlankRule,
    BodyMaxLineLengthRule,
    FooterLeadingBlankRule,
    FooterMaxLineLengthRule,
)

# --- Value shapes ---

_VALUE_ADAPTERS: dict[ValueKind, TypeAdapter[Any]] = {
    ValueKind.ENUM: TypeAdapter(
        Annotated[list[Annotated[StrictStr, Field(min_length=1)]], Field(min_length=1)]
    ),
    ValueKind.LENGTH: TypeAdapter(Annotated[StrictInt, Field(gt=0)]),
    ValueKind.CASE: TypeAdapter(Literal["lower-case", "upper-case"]),
    ValueKind.TEXT: TypeAdapter(Annotated[StrictStr, Field(min_length=1)]),
}


def _safe_error_summary(e: ValidationError) -> str:
    """Field paths and error type codes only; raw values are not echoed.

    Messages of our own validators (``value_error``) are kept since they
    never contain user input beyond what the key already names.
    """
    parts: list[str] = []
    for err in e.errors():
        loc = ".".join(str(loc) for loc in err["loc"])
        detail = err["msg"] if err["type"] == "value_error" else err["type"]
        parts.append(f"{loc}: {detail}" if loc else detail)
    return "; ".join(parts)


def validate_value(name: str, kind: ValueKind, value: Any) -> Any:
    """Validate and normalize a rule value for its kind.

    Returns a hashable normalized value (enum values become tuples).

    Raises:
        ConfigurationError: If the value does not fit the kind's shape.
    """
    if kind is ValueKind.NONE:
        if value is not None:
            msg = "rule takes no value"
            raise ConfigurationError(msg, key=name)
        return None

    if value is None:
        msg = f"rule requires a {kind.value} value"
        raise ConfigurationError(msg, key=name)

    try:
        validated = _VALUE_ADAPTERS[kind].validate_python(value)
    except ValidationError as e:
        msg = f"invalid {kind.value} value ({_safe_error_summary(e)})"
        raise ConfigurationError(msg, key=name) from e

    if kind is ValueKind.ENUM:
        if len(set(validated)) != len(validated):
            msg = "enum value contains duplicates"
            raise ConfigurationError(msg, key=name)
        return tuple(validated)
    return validated


# --- Catalog ---


class RuleCatalog:
    """Lookup table of rule instances keyed by rule name."""

    def __init__(self, rule_classes: Iterable[type[Rule]] | None = None) -> None:
        rules: dict[str, Rule] = {}
        for cls in RULE_CLASSES if rule_classes is None else rule_classes:
            rule = cls()
            if rule.name in rules:
                msg = "duplicate rule name in catalog"
                raise ConfigurationError(msg, key=rule.name)
            rules[rule.name] = rule
        self._rules: Mapping[str, Rule] = MappingProxyType(rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, name: str) -> Rule:
        """Return the rule named *name*.

        Raises:
            ConfigurationError: If no such rule exists.
        """
        try:
            return self._rules[name]
        except KeyError:
            msg = f"unknown rule. Known rules: {sorted(self._rules)}"
            raise ConfigurationError(msg, key=name) from None

    def names(self) -> list[str]:
        return list(self._rules)


def default_catalog() -> RuleCatalog:
    """Build a catalog holding every built-in rule."""
    return RuleCatalog()


# --- Specs and registry ---


@dataclass(frozen=True)
class RuleSpec:
    """Effective configuration of one rule."""

    name: str
    severity: RuleSeverity
    applicability: Applicability = Applicability.ALWAYS
    value: Any = None

    @property
    def enabled(self) -> bool:
        return self.severity is not RuleSeverity.OFF


def parse_rule_entry(name: str, entry: Any, catalog: RuleCatalog) -> RuleSpec:
    """Turn a ``[severity, applicability?, value?]`` entry into a validated RuleSpec.

    Raises:
        ConfigurationError: On an unknown rule or a malformed entry.
    """
    rule = catalog.get(name)
    if isinstance(entry, RuleSpec):
        if entry.name != name:
            msg = f"RuleSpec is named {entry.name!r}"
            raise ConfigurationError(msg, key=name)
        return _validated_spec(entry, rule)

    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or not 1 <= len(entry) <= 3:
        msg = "rule entry must be [severity], [severity, applicability] or [severity, applicability, value]"
        raise ConfigurationError(msg, key=name)

    try:
        severity = RuleSeverity.coerce(entry[0])
    except ValueError as e:
        raise ConfigurationError(str(e), key=name) from e

    applicability: Applicability | None = None
    if len(entry) >= 2:
        try:
            applicability = Applicability(entry[1])
        except ValueError as e:
            msg = f"applicability must be 'always' or 'never', got {entry[1]!r}"
            raise ConfigurationError(msg, key=name) from e

    if applicability is None:
        if severity is not RuleSeverity.OFF:
            msg = "applicability is required for an enabled rule"
            raise ConfigurationError(msg, key=name)
        applicability = Applicability.ALWAYS

    value = entry[2] if len(entry) == 3 else None
    return _validated_spec(RuleSpec(name, severity, applicability, value), rule)


def _validated_spec(spec: RuleSpec, rule: Rule) -> RuleSpec:
    # Disabled rules may omit their value; a value that is present is still checked.
    if spec.severity is RuleSeverity.OFF and spec.value is None:
        return spec
    value = validate_value(spec.name, rule.value_kind, spec.value)
    return RuleSpec(spec.name, spec.severity, spec.applicability, value)


class RuleRegistry(Mapping[str, RuleSpec]):
    """Read-only ``name -> RuleSpec`` table shared across all linted messages."""

    def __init__(self, specs: Mapping[str, RuleSpec], catalog: RuleCatalog) -> None:
        self._specs: Mapping[str, RuleSpec] = MappingProxyType(dict(specs))
        self.catalog = catalog

    def __getitem__(self, name: str) -> RuleSpec:
        return self._specs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"RuleRegistry({dict(self._specs)!r})"

    def enabled(self) -> list[tuple[Rule, RuleSpec]]:
        """Return (rule, spec) pairs for every rule whose severity is not off."""
        return [(self.catalog.get(name), spec) for name, spec in self._specs.items() if spec.enabled]


def build_registry(
    layers: Sequence[Mapping[str, Any]],
    catalog: RuleCatalog | None = None,
) -> RuleRegistry:
    """Merge rule layers left to right into a validated registry.

    A later layer replaces an earlier entry of the same name entirely.

    Args:
        layers: Ordered rule maps (``name -> entry`` or ``name -> RuleSpec``).
        catalog: Rules the engine knows about. Defaults to every built-in rule.

    Raises:
        ConfigurationError: On any unknown rule name or malformed entry.
    """
    if catalog is None:
        catalog = default_catalog()
    merged: dict[str, RuleSpec] = {}
    for layer in layers:
        for name, entry in layer.items():
            merged[name] = parse_rule_entry(name, entry, catalog)
    return RuleRegistry(merged, catalog)
