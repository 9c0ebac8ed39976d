from __future__ import annotations

from typing import Any, Mapping

from option_pricing.utils.logging_config import DEFAULT_FORMAT, setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": DEFAULT_FORMAT,
    "file": None,
    "color": True,
    "modules": {},
}


def add_logging_args(parser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    parser.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    parser.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fill unset keys of a ``logging`` section from ``DEFAULT_LOGGING``."""
    normalized = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in DEFAULT_LOGGING.items()
    }
    if not config:
        return normalized

    for key in ("level", "format", "file", "color"):
        if config.get(key) is not None:
            normalized[key] = config[key]

    modules = config.get("modules")
    if modules:
        if not isinstance(modules, Mapping):
            raise ValueError("logging.modules must be a mapping of logger -> level.")
        normalized["modules"] = dict(modules)

    return normalized


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["modules"] or None,
        colored=bool(log_cfg["color"]),
    )
