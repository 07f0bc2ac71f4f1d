"""Plugin manifests: loading, parsing and sample seeding.

A plugin is a JSON file in the plugin directory::

    {
      "name": "Built-in Examples",
      "commands": [
        {"id": "open-apple", "title": "Open Apple", "subtitle": "https://apple.com",
         "action": {"type": "url", "value": "https://apple.com"}}
      ]
    }

A file that is not an object with a string ``name`` and a list ``commands`` is
rejected as a whole. Inside an accepted file, commands missing a field are
skipped one by one. Action kinds are not checked here; the index drops the
ones it cannot run.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from elbert.errors import ElbertError, ErrorCode
from elbert.models import LoadedPlugin, PluginCommand, PluginCommandAction, PluginManifest

log = structlog.get_logger()

MANIFEST_SUFFIX = ".json"
SAMPLE_FILENAME = "sample-plugin.json"

SAMPLE_MANIFEST = PluginManifest(
    name="Built-in Examples",
    commands=[
        PluginCommand(
            id="open-apple",
            title="Open Apple",
            subtitle="https://apple.com",
            action=PluginCommandAction(type="url", value="https://apple.com"),
        )
    ],
)


def parse_manifest(data: str | bytes) -> PluginManifest:
    """Parse manifest JSON. Raises ElbertError if the file shape is wrong."""
    try:
        obj: Any = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ElbertError(
            ErrorCode.MANIFEST_INVALID, f"Manifest is not valid JSON: {exc}"
        ) from exc

    if not isinstance(obj, dict):
        raise ElbertError(ErrorCode.MANIFEST_INVALID, "Manifest must be a JSON object")
    name = obj.get("name")
    raw_commands = obj.get("commands")
    if not isinstance(name, str):
        raise ElbertError(ErrorCode.MANIFEST_INVALID, "Manifest 'name' must be a string")
    if not isinstance(raw_commands, list):
        raise ElbertError(ErrorCode.MANIFEST_INVALID, "Manifest 'commands' must be a list")

    commands: list[PluginCommand] = []
    for raw in raw_commands:
        try:
            commands.append(PluginCommand.model_validate(raw))
        except ValidationError:
            log.debug("manifest_command_skipped", manifest=name, command=repr(raw))
    return PluginManifest(name=name, commands=commands)


def load_manifest(path: Path) -> PluginManifest:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ElbertError(
            ErrorCode.MANIFEST_UNREADABLE,
            f"Could not read manifest {path}: {exc}",
            recoverable=True,
        ) from exc
    return parse_manifest(data)


class PluginManager:
    """Loads every manifest in one directory.

    ``sample_manifest`` is written as ``sample-plugin.json`` when that file is
    missing; pass ``None`` to disable seeding.
    """

    def __init__(
        self,
        directory: str | Path,
        sample_manifest: PluginManifest | None = None,
    ) -> None:
        self.directory = Path(directory).expanduser()
        self.sample_manifest = sample_manifest
        self._plugins: list[LoadedPlugin] = []
        self._lock = threading.Lock()

    @property
    def plugins(self) -> list[LoadedPlugin]:
        return list(self._plugins)

    def reload(self) -> list[LoadedPlugin]:
        """Re-read the plugin directory. Bad manifests are logged and skipped."""
        with self._lock:
            self._ensure_directory()
            self._write_sample_if_missing()

            loaded: list[LoadedPlugin] = []
            for path in self._manifest_candidates():
                if path.suffix.lower() != MANIFEST_SUFFIX or not path.is_file():
                    continue
                try:
                    manifest = load_manifest(path)
                except ElbertError as exc:
                    log.warning(
                        "manifest_skipped",
                        path=str(path),
                        code=exc.code.value,
                        reason=exc.message,
                    )
                    continue
                loaded.append(
                    LoadedPlugin(name=manifest.name, path=str(path), commands=manifest.commands)
                )

            self._plugins = loaded

        log.info(
            "plugins_loaded",
            directory=str(self.directory),
            plugins=len(loaded),
            commands=sum(len(plugin.commands) for plugin in loaded),
        )
        return list(loaded)

    def _ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ElbertError(
                ErrorCode.PLUGIN_DIRECTORY_UNAVAILABLE,
                f"Could not create plugin directory {self.directory}: {exc}",
            ) from exc

    def _manifest_candidates(self) -> list[Path]:
        try:
            return sorted(self.directory.iterdir())
        except OSError as exc:
            raise ElbertError(
                ErrorCode.PLUGIN_DIRECTORY_UNAVAILABLE,
                f"Could not list plugin directory {self.directory}: {exc}",
            ) from exc

    def _write_sample_if_missing(self) -> None:
        if self.sample_manifest is None:
            return
        sample = self.directory / SAMPLE_FILENAME
        if sample.exists():
            return
        try:
            sample.write_text(self.sample_manifest.model_dump_json(indent=2), encoding="utf-8")
        except OSError:
            # Non-fatal: user manifests still load
            log.warning("sample_manifest_write_error", path=str(sample), exc_info=True)
