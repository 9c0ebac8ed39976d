"""Layered YAML configuration for the command-line entry points.

Precedence, lowest first: program defaults, the ``--config`` YAML file, then
command-line overrides. Nested mappings are merged key by key; any other value
(lists included) is replaced wholesale.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from option_pricing.errors import InvalidArgumentError, MissingRequiredValueError
from option_pricing.options.contracts import Contract

CONTRACT_FIELDS = (
    "option_type",
    "option_style",
    "spot_price",
    "strike_price",
    "time_to_maturity",
    "volatility",
    "risk_free_rate",
    "dividend_yield",
)


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=default,
        help="Path to a YAML config file.",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Read a YAML file whose top level is a mapping; ``None`` gives ``{}``."""
    if path is None:
        return {}

    p = resolve_path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a YAML mapping at the top level.")
    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Recursively merge ``updates`` into a copy of ``base``."""
    merged = {
        key: deep_merge(value, {}) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    if overrides:
        config = deep_merge(config, overrides)
    return config


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand ``~`` and ``$VARS`` in a path; ``None`` and ``Path`` pass through."""
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    return Path(os.path.expandvars(os.path.expanduser(str(value))))


def contract_from_config(section: Mapping[str, Any] | None) -> Contract:
    """Build a validated ``Contract`` from the ``contract`` config section.

    Unknown keys are rejected so a misspelt field can't silently fall back to its
    default. Missing rate/yield default to zero; every other field is required.
    """
    if not section:
        raise InvalidArgumentError("contract section must not be empty")

    unknown = sorted(set(section) - set(CONTRACT_FIELDS))
    if unknown:
        raise InvalidArgumentError(f"Unknown contract field(s): {unknown}")

    fields = dict(section)
    fields.setdefault("risk_free_rate", 0.0)
    fields.setdefault("dividend_yield", 0.0)
    missing = [name for name in CONTRACT_FIELDS if fields.get(name) is None]
    if missing:
        raise MissingRequiredValueError(f"Missing contract field(s): {missing}")

    return Contract(**fields)
