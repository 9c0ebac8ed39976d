"""Logging setup for the command-line entry points.

Library modules only do ``logger = logging.getLogger(__name__)`` and log at DEBUG
(tree parameters, trace assembly). Handlers are installed here, once, by whatever
program drives the library.

The console handler carries a filter that sets ``record.shortname`` to the last
dotted component of the logger name, so console formats may use
``%(shortname)s`` (``bsm_pricer`` instead of
``option_pricing.options.engines.bsm_pricer``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(shortname)s - %(message)s"
DEFAULT_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO when pandas is imported.
NOISY_LOGGERS = ("numexpr",)

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


class _ShortNameFilter(logging.Filter):
    """Attach ``record.shortname`` without touching ``record.name``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rsplit(".", 1)[-1]
        return True


class _LevelColorFormatter(logging.Formatter):
    """Console formatter that wraps the level name in an ANSI colour."""

    _RESET = "\033[0m"
    _COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def coerce_level(level: int | str) -> int:
    """Turn ``"debug"``, ``"10"`` or ``logging.DEBUG`` into an int level."""
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if not name:
        raise ValueError("Empty logging level")
    if name.isdigit():
        return int(name)
    try:
        return _LEVELS[name]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = DEFAULT_FORMAT,
    fmt_file: str = DEFAULT_FILE_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
    quiet_third_party: bool = True,
) -> None:
    """Install console (and optionally file) handlers on the root logger.

    Parameters
    - level: Root level, int or name.
    - fmt_console: Console format; ``%(shortname)s`` is available.
    - fmt_file: File format, used only with ``log_file``.
    - datefmt: Timestamp format for both handlers.
    - log_file: Also append records to this file (parent dirs are created).
    - module_levels: Per-logger level overrides, e.g.
      ``{"option_pricing.options.models": "DEBUG"}``.
    - colored: Colour level names on the console.
    - quiet_third_party: Raise ``NOISY_LOGGERS`` to WARNING.

    Uses ``force=True`` so calling it twice replaces the handlers instead of
    duplicating output.
    """
    root_level = coerce_level(level)

    console = logging.StreamHandler()
    console.addFilter(_ShortNameFilter())
    formatter_cls = _LevelColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt_console, datefmt=datefmt))
    handlers: list[logging.Handler] = [console]

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(file_handler)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(coerce_level(module_level))

    if quiet_third_party:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
