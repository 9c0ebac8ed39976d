"""Argument and config helpers for the pricing command line."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from option_pricing.errors import InvalidArgumentError
from option_pricing.options.engines.bsm_pricer import TRACE_QUANTITIES

# argparse dest -> key of the ``logging`` config section
_LOGGING_FLAGS = {
    "log_level": "level",
    "log_file": "file",
    "log_format": "format",
    "log_color": "color",
}


def trace_quantities(value: Any) -> list[str]:
    """Validated, lowercased trace names from a config value.

    ``None`` means no traces; a single name is accepted in place of a list.
    """
    if value is None:
        return []
    names = [value] if isinstance(value, str) else list(value)
    quantities = [str(name).strip().lower() for name in names]
    unknown = [name for name in quantities if name not in TRACE_QUANTITIES]
    if unknown:
        raise InvalidArgumentError(
            f"Unknown trace quantities {unknown}; expected any of {list(TRACE_QUANTITIES)}"
        )
    return quantities


def add_print_config_arg(parser) -> None:
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the merged config as JSON and exit without pricing.",
    )


def logging_overrides(args) -> dict[str, Any]:
    """``logging`` section entries for the logging flags actually given."""
    return {
        key: getattr(args, dest)
        for dest, key in _LOGGING_FLAGS.items()
        if getattr(args, dest, None) is not None
    }


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def print_config(config: Mapping[str, Any]) -> None:
    """Dump the merged config as sorted, indented JSON on stdout."""
    print(json.dumps(_jsonable(config), indent=2, sort_keys=True))
