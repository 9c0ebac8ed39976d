from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config"


@pytest.fixture
def config_path():
    def _path(name: str) -> str:
        return str(CONFIG_ROOT / name)

    return _path


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert expected in out

    return _run


@pytest.fixture
def run_print_config(capsys, parse_printed_config):
    def _run(mod, config_path: str) -> dict[str, Any]:
        mod.main(
            [
                "--config",
                config_path,
                "--print-config",
            ]
        )
        return parse_printed_config(capsys.readouterr().out)

    return _run


@pytest.fixture
def assert_paths_exist():
    def _assert(cfg: dict[str, Any], paths: list[tuple[str, ...]]) -> None:
        for keys in paths:
            cur: Any = cfg
            for key in keys:
                assert key in cur
                cur = cur[key]

    return _assert


@pytest.fixture
def no_logging_setup(monkeypatch):
    """Keep the app from reconfiguring root logging during a test."""

    def _patch(mod) -> None:
        monkeypatch.setattr(mod, "setup_logging_from_config", lambda cfg: None)

    return _patch


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(data: dict[str, Any]) -> str:
        path = tmp_path / "price_option.yml"
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)
        return str(path)

    return _write
