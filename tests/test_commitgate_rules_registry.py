# SPDX-License-Identifier: MIT
"""Tests for commitgate.rules.registry: catalog, rule entries, layer merging."""

from __future__ import annotations

from typing import Any

import pytest

from commitgate.rules.base import Applicability, ConfigurationError, RuleSeverity
from commitgate.rules.header_rules import HeaderMaxLengthRule
from commitgate.rules.registry import (
    RuleCatalog,
    RuleSpec,
    build_registry,
    default_catalog,
    parse_rule_entry,
)


class TestRuleCatalog:
    def test_default_catalog_has_exemplar_rules(self) -> None:
        catalog = default_catalog()
        for name in ("scope-empty", "scope-enum", "header-max-length"):
            assert name in catalog

    def test_default_catalog_size(self) -> None:
        assert len(default_catalog()) == 14

    def test_unknown_rule_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown rule") as exc_info:
            default_catalog().get("no-such-rule")
        assert exc_info.value.key == "no-such-rule"

    def test_custom_catalog(self) -> None:
        catalog = RuleCatalog([HeaderMaxLengthRule])
        assert catalog.names() == ["header-max-length"]
        assert "scope-enum" not in catalog

    def test_duplicate_rule_names_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="duplicate"):
            RuleCatalog([HeaderMaxLengthRule, HeaderMaxLengthRule])

    def test_catalogs_are_independent(self) -> None:
        assert default_catalog() is not default_catalog()


class TestParseRuleEntry:
    def _parse(self, name: str, entry: Any) -> RuleSpec:
        return parse_rule_entry(name, entry, default_catalog())

    def test_full_triple(self) -> None:
        spec = self._parse("header-max-length", [2, "always", 100])
        assert spec == RuleSpec("header-max-length", RuleSeverity.ERROR, Applicability.ALWAYS, 100)

    def test_enum_value_becomes_tuple(self) -> None:
        spec = self._parse("scope-enum", [2, "always", ["foo", "baz"]])
        assert spec.value == ("foo", "baz")

    def test_pair_for_valueless_rule(self) -> None:
        spec = self._parse("scope-empty", [2, "never"])
        assert spec.severity is RuleSeverity.ERROR
        assert spec.applicability is Applicability.NEVER
        assert spec.value is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (0, RuleSeverity.OFF),
            (1, RuleSeverity.WARNING),
            (2, RuleSeverity.ERROR),
            ("off", RuleSeverity.OFF),
            ("warn", RuleSeverity.WARNING),
            ("warning", RuleSeverity.WARNING),
            ("error", RuleSeverity.ERROR),
            ("ERROR", RuleSeverity.ERROR),
        ],
    )
    def test_severity_forms(self, raw: Any, expected: RuleSeverity) -> None:
        assert self._parse("scope-empty", [raw, "never"]).severity is expected

    def test_disabled_without_applicability(self) -> None:
        spec = self._parse("header-max-length", [0])
        assert spec.severity is RuleSeverity.OFF
        assert spec.enabled is False

    @pytest.mark.parametrize(
        ("name", "entry", "fragment"),
        [
            ("scope-empty", [3, "never"], "severity"),
            ("scope-empty", [True, "never"], "severity"),
            ("scope-empty", ["fatal", "never"], "severity"),
            ("scope-empty", [2, "sometimes"], "applicability"),
            ("scope-empty", [2], "applicability is required"),
            ("scope-empty", [2, "never", "x"], "takes no value"),
            ("scope-empty", "error", "rule entry must be"),
            ("scope-empty", [], "rule entry must be"),
            ("scope-empty", [2, "never", None, 1], "rule entry must be"),
            ("header-max-length", [2, "always"], "requires a length value"),
            ("header-max-length", [2, "always", 0], "invalid length value"),
            ("header-max-length", [2, "always", -5], "invalid length value"),
            ("header-max-length", [2, "always", "100"], "invalid length value"),
            ("header-max-length", [2, "always", True], "invalid length value"),
            ("header-max-length", [2, "always", 99.5], "invalid length value"),
            ("scope-enum", [2, "always", []], "invalid enum value"),
            ("scope-enum", [2, "always", "foo"], "invalid enum value"),
            ("scope-enum", [2, "always", ["foo", 1]], "invalid enum value"),
            ("scope-enum", [2, "always", ["foo", ""]], "invalid enum value"),
            ("scope-enum", [2, "always", ["foo", "foo"]], "duplicates"),
            ("type-case", [2, "always", "camel-case"], "invalid case value"),
            ("subject-full-stop", [2, "never", ""], "invalid text value"),
        ],
    )
    def test_malformed_entries(self, name: str, entry: Any, fragment: str) -> None:
        with pytest.raises(ConfigurationError, match=fragment) as exc_info:
            self._parse(name, entry)
        assert exc_info.value.key == name

    def test_disabled_rule_value_still_validated(self) -> None:
        with pytest.raises(ConfigurationError):
            self._parse("header-max-length", [0, "always", -1])

    def test_rule_spec_accepted(self) -> None:
        spec = RuleSpec("scope-enum", RuleSeverity.WARNING, Applicability.ALWAYS, ["a"])
        assert self._parse("scope-enum", spec).value == ("a",)

    def test_rule_spec_name_mismatch(self) -> None:
        spec = RuleSpec("scope-enum", RuleSeverity.WARNING, Applicability.ALWAYS, ["a"])
        with pytest.raises(ConfigurationError):
            self._parse("type-enum", spec)


class TestBuildRegistry:
    def test_empty(self) -> None:
        assert len(build_registry([])) == 0

    def test_later_layer_replaces_entry(self) -> None:
        registry = build_registry(
            [
                {"scope-empty": [2, "never"]},
                {"scope-empty": [0, "never"]},
            ]
        )
        assert registry["scope-empty"].severity is RuleSeverity.OFF

    def test_replacement_is_whole_entry(self) -> None:
        registry = build_registry(
            [
                {"header-max-length": [2, "always", 100]},
                {"header-max-length": [1, "never", 72]},
            ]
        )
        assert registry["header-max-length"] == RuleSpec(
            "header-max-length", RuleSeverity.WARNING, Applicability.NEVER, 72
        )

    def test_untouched_entries_survive(self) -> None:
        registry = build_registry(
            [
                {"scope-empty": [2, "never"], "header-max-length": [2, "always", 100]},
                {"scope-empty": [0]},
            ]
        )
        assert registry["header-max-length"].value == 100
        assert set(registry) == {"scope-empty", "header-max-length"}

    def test_merge_is_associative(self) -> None:
        l1 = {"scope-empty": [2, "never"], "header-max-length": [2, "always", 100]}
        l2 = {"scope-empty": [1, "always"], "scope-enum": [2, "always", ["a"]]}
        l3 = {"header-max-length": [1, "always", 50]}
        left = build_registry([l1, l2, l3])
        right = build_registry([{**l1, **l2}, l3])
        assert dict(left) == dict(right)

    def test_unknown_rule_fails_at_build(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            build_registry([{"scope-empty": [2, "never"]}, {"subject-mood": [2, "always"]}])
        assert exc_info.value.key == "subject-mood"

    def test_custom_catalog_limits_names(self) -> None:
        with pytest.raises(ConfigurationError):
            build_registry([{"scope-empty": [2, "never"]}], RuleCatalog([HeaderMaxLengthRule]))

    def test_registry_is_read_only(self) -> None:
        registry = build_registry([{"scope-empty": [2, "never"]}])
        with pytest.raises(TypeError):
            registry["scope-empty"] = RuleSpec("scope-empty", RuleSeverity.OFF)  # type: ignore[index]

    def test_enabled_skips_off(self) -> None:
        registry = build_registry([{"scope-empty": [0], "header-max-length": [2, "always", 10]}])
        assert [spec.name for _, spec in registry.enabled()] == ["header-max-length"]
