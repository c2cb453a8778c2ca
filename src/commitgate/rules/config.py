# SPDX-License-Identifier: MIT
"""Lint configuration: layers, presets, extends resolution, and loading."""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from commitgate.rules.base import ConfigurationError
from commitgate.rules.ignores import CallableIgnore, ExactIgnore, IgnorePredicate, PatternIgnore
from commitgate.rules.registry import RuleCatalog, RuleRegistry, _safe_error_summary, build_registry

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COMMITGATE_CONFIG"
DEFAULT_CONFIG_FILENAME = ".commitgate.json"
DEFAULT_FORMATTER = "default"

CONVENTIONAL_TYPES = [
    "build",
    "chore",
    "ci",
    "docs",
    "feat",
    "fix",
    "perf",
    "refactor",
    "revert",
    "style",
    "test",
]

_CONFIG_CONVENTIONAL: dict[str, Any] = {
    "rules": {
        "body-leading-blank": [1, "always"],
        "body-max-line-length": [2, "always", 100],
        "footer-leading-blank": [1, "always"],
        "footer-max-line-length": [2, "always", 100],
        "header-max-length": [2, "always", 100],
        "subject-empty": [2, "never"],
        "subject-full-stop": [2, "never", "."],
        "type-case": [2, "always", "lower-case"],
        "type-empty": [2, "never"],
        "type-enum": [2, "always", CONVENTIONAL_TYPES],
    },
}

PRESETS: dict[str, dict[str, Any]] = {
    "config-conventional": _CONFIG_CONVENTIONAL,
    "@commitlint/config-conventional": _CONFIG_CONVENTIONAL,
}


def _coerce_ignore(item: Any) -> IgnorePredicate:
    if isinstance(item, (ExactIgnore, PatternIgnore, CallableIgnore)):
        return item
    if isinstance(item, Mapping):
        if set(item) == {"equals"} and isinstance(item["equals"], str):
            return ExactIgnore(item["equals"])
        if set(item) == {"pattern"} and isinstance(item["pattern"], str):
            try:
                return PatternIgnore.compile(item["pattern"])
            except re.error as e:
                msg = f"invalid ignore pattern: {e}"
                raise ValueError(msg) from e
        msg = 'ignore entries must be {"equals": str} or {"pattern": str}'
        raise ValueError(msg)
    if isinstance(item, IgnorePredicate):
        return item
    if callable(item):
        return CallableIgnore(item, getattr(item, "__name__", "custom"))
    msg = f"unsupported ignore entry of type {type(item).__name__}"
    raise ValueError(msg)


class ConfigLayer(BaseModel):
    """One configuration layer as written by a user or shipped as a preset."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )

    extends: list[str] = Field(default_factory=list)
    rules: dict[str, Any] = Field(default_factory=dict)
    ignores: list[Any] = Field(default_factory=list)
    default_ignores: bool | None = Field(default=None, alias="defaultIgnores")
    formatter: str | None = None
    help_url: str | None = Field(default=None, alias="helpUrl")

    @field_validator("extends", mode="before")
    @classmethod
    def _single_extends(cls, v: Any) -> Any:
        return [v] if isinstance(v, str) else v

    @field_validator("ignores", mode="before")
    @classmethod
    def _predicates(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            return v
        return [_coerce_ignore(item) for item in v]


def parse_layer(data: ConfigLayer | Mapping[str, Any], source: str = "<config>") -> ConfigLayer:
    """Validate a raw mapping as a ConfigLayer.

    Raises:
        ConfigurationError: Naming the first offending key.
    """
    if isinstance(data, ConfigLayer):
        return data
    if not isinstance(data, Mapping):
        msg = f"configuration in {source} must be an object, got {type(data).__name__}"
        raise ConfigurationError(msg)
    try:
        return ConfigLayer.model_validate(dict(data))
    except ValidationError as e:
        first = e.errors()[0]["loc"]
        key = str(first[0]) if first else None
        msg = f"invalid configuration in {source} ({_safe_error_summary(e)})"
        raise ConfigurationError(msg, key=key) from e


@dataclass(frozen=True)
class LintConfig:
    """Everything a linting session needs, built once and shared read-only."""

    registry: RuleRegistry
    ignores: tuple[IgnorePredicate, ...] = ()
    default_ignores: bool = True
    formatter: str = DEFAULT_FORMATTER
    help_url: str | None = None


def build_config(
    layers: Sequence[ConfigLayer | Mapping[str, Any]],
    catalog: RuleCatalog | None = None,
) -> LintConfig:
    """Merge already-resolved layers (base first) into a LintConfig.

    Rules merge per name, last layer wins. Ignores concatenate in layer order.
    ``defaultIgnores``, ``formatter`` and ``helpUrl`` take the last value set.

    Raises:
        ConfigurationError: On any invalid rule, ignore, or formatter reference.
    """
    from commitgate.report import FORMATTERS

    parsed = [parse_layer(layer) for layer in layers]
    registry = build_registry([layer.rules for layer in parsed], catalog)

    ignores: list[IgnorePredicate] = []
    default_ignores = True
    formatter = DEFAULT_FORMATTER
    help_url: str | None = None
    for layer in parsed:
        ignores.extend(layer.ignores)
        if layer.default_ignores is not None:
            default_ignores = layer.default_ignores
        if layer.formatter is not None:
            formatter = layer.formatter
        if layer.help_url is not None:
            help_url = layer.help_url

    if formatter not in FORMATTERS:
        msg = f"unknown formatter {formatter!r}. Valid formatters: {sorted(FORMATTERS)}"
        raise ConfigurationError(msg, key="formatter")

    return LintConfig(
        registry=registry,
        ignores=tuple(ignores),
        default_ignores=default_ignores,
        formatter=formatter,
        help_url=help_url,
    )


# --- Extends resolution ---


def resolve_layers(
    data: ConfigLayer | Mapping[str, Any],
    *,
    base_dir: Path | None = None,
    source: str = "<config>",
) -> list[ConfigLayer]:
    """Flatten a layer and everything it extends into base-first order.

    ``extends`` entries name a preset or a JSON file relative to *base_dir*.

    Raises:
        ConfigurationError: On an unknown preset, unreadable file, or cycle.
    """
    return _resolve(parse_layer(data, source), base_dir or Path.cwd(), (source,))


def _resolve(layer: ConfigLayer, base_dir: Path, chain: tuple[str, ...]) -> list[ConfigLayer]:
    resolved: list[ConfigLayer] = []
    for name in layer.extends:
        if name in PRESETS:
            ref = f"preset:{name}"
            _check_cycle(ref, chain)
            preset = parse_layer(PRESETS[name], ref)
            resolved.extend(_resolve(preset, base_dir, (*chain, ref)))
            continue
        if name.endswith(".json"):
            path = (base_dir / name).resolve()
            ref = str(path)
            _check_cycle(ref, chain)
            child = parse_layer(_read_json(path), ref)
            resolved.extend(_resolve(child, path.parent, (*chain, ref)))
            continue
        msg = f"cannot resolve {name!r}. Known presets: {sorted(PRESETS)}; files must end in .json"
        raise ConfigurationError(msg, key="extends")
    resolved.append(layer)
    return resolved


def _check_cycle(ref: str, chain: tuple[str, ...]) -> None:
    if ref in chain:
        msg = f"cycle: {' -> '.join((*chain, ref))}"
        raise ConfigurationError(msg, key="extends")


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        msg = f"cannot read {path}: {e.strerror or e}"
        raise ConfigurationError(msg, key="extends") from e
    except UnicodeDecodeError as e:
        msg = f"{path} is not valid UTF-8 (byte offset {e.start})"
        raise ConfigurationError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"{path} is not valid JSON (line {e.lineno}, column {e.colno})"
        raise ConfigurationError(msg) from e


# --- Loading ---

DEFAULT_LAYER: dict[str, Any] = {"extends": ["config-conventional"]}


def find_config_path(cli_path: str | None = None) -> Path | None:
    """Resolve the config file with CLI > env > working directory priority."""
    if cli_path:
        return Path(cli_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(cli_path: str | None = None, catalog: RuleCatalog | None = None) -> LintConfig:
    """Load, resolve, and build the session configuration.

    Falls back to the ``config-conventional`` preset when no file is found.

    Raises:
        ConfigurationError: If anything about the configuration is invalid.
    """
    path = find_config_path(cli_path)
    if path is None:
        log.debug("No config file found; using %s", DEFAULT_LAYER)
        layers = resolve_layers(DEFAULT_LAYER, source="<default>")
    else:
        if not path.is_file():
            msg = f"config file not found: {path}"
            raise ConfigurationError(msg)
        log.debug("Loading config from %s", path)
        layers = resolve_layers(_read_json(path), base_dir=path.parent, source=str(path.resolve()))
    return build_config(layers, catalog)
