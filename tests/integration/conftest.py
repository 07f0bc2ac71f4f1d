"""Integration fixtures: a throwaway application root and plugin directory."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

import pytest

from elbert.config import Settings
from elbert.state import AppState

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def app_root(tmp_path: Path) -> Path:
    root = tmp_path / "Applications"
    for name in ("Safari", "Firefox", "Notes"):
        (root / f"{name}.app" / "Contents").mkdir(parents=True)
    (root / "Utilities" / "Terminal.app" / "Contents").mkdir(parents=True)
    return root


@pytest.fixture()
def plugin_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "Plugins"
    directory.mkdir()
    manifest = {
        "name": "Dev Tools",
        "commands": [
            {
                "id": "open-docs",
                "title": "Python Docs",
                "subtitle": "https://docs.python.org",
                "action": {"type": "url", "value": "https://docs.python.org"},
            },
            {
                "id": "flush-dns",
                "title": "Flush DNS",
                "subtitle": "dscacheutil -flushcache",
                "action": {"type": "shell", "value": "dscacheutil -flushcache"},
            },
            {
                "id": "beep",
                "title": "Beep",
                "subtitle": "",
                "action": {"type": "applescript", "value": "beep"},
            },
        ],
    }
    (directory / "dev-tools.json").write_text(json.dumps(manifest), encoding="utf-8")
    return directory


@pytest.fixture()
def settings(app_root: Path, plugin_dir: Path) -> Settings:
    return Settings(
        discovery={"application_dirs": [str(app_root)]},  # type: ignore[arg-type]
        plugins={"directory": str(plugin_dir), "create_sample": False},  # type: ignore[arg-type]
    )


@pytest.fixture()
def app_state(settings: Settings) -> AppState:
    return AppState.from_settings(settings)


@pytest.fixture()
def subprocess_env(tmp_path: Path, app_root: Path, plugin_dir: Path) -> dict[str, str]:
    """Environment for running ``python -m elbert`` against the fixtures."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("ELBERT__")}
    env["ELBERT__DISCOVERY__APPLICATION_DIRS"] = json.dumps([str(app_root)])
    env["ELBERT__PLUGINS__DIRECTORY"] = str(plugin_dir)
    env["ELBERT__PLUGINS__CREATE_SAMPLE"] = "false"
    env["ELBERT__LOGGING__LEVEL"] = "WARNING"
    return env
