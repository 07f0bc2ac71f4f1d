"""In-memory search index over applications and plugin commands.

The index holds one immutable ``IndexSnapshot`` at a time. ``rebuild`` builds
the next snapshot completely off to the side while holding the writer lock and
publishes it with a single attribute assignment. ``search`` reads the
published reference once and never takes the lock, so a search sees either
the old or the new snapshot, never a mix of the two.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import AnyUrl, TypeAdapter, ValidationError

from elbert import matcher
from elbert.models import (
    ActionKind,
    AppCandidate,
    OpenApplication,
    OpenURL,
    PluginCommand,
    RunShellCommand,
    SearchResult,
)

if TYPE_CHECKING:
    from elbert.config import SearchSettings

log = structlog.get_logger()

APP_SOURCE = "App"
PLUGIN_SOURCE = "Plugin"

# Stored score of materialized commands, used by the empty-query browse list
URL_COMMAND_SCORE = 400
SHELL_COMMAND_SCORE = 350

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class IndexSnapshot:
    """Both candidate collections valid at one point in time."""

    # Deduplicated by display name, sorted by display name
    apps: tuple[AppCandidate, ...] = ()

    # Plugin commands already converted to result shape
    commands: tuple[SearchResult, ...] = ()


def _coerce_app(raw: Any) -> AppCandidate | None:
    if isinstance(raw, AppCandidate):
        return raw
    if isinstance(raw, str):
        log.debug("app_candidate_dropped", candidate=raw)
        return None
    try:
        if isinstance(raw, Mapping):
            return AppCandidate.model_validate(raw)
        display_name, locator = raw
        return AppCandidate(display_name=display_name, locator=locator)
    except (ValidationError, TypeError, ValueError):
        log.debug("app_candidate_dropped", candidate=repr(raw))
        return None


def _coerce_command(raw: Any) -> PluginCommand | None:
    if isinstance(raw, PluginCommand):
        return raw
    if isinstance(raw, Mapping) and "action" not in raw and "action_kind" in raw:
        # Flat record: {id, title, subtitle, action_kind, action_value}
        raw = {
            **{k: v for k, v in raw.items() if k not in ("action_kind", "action_value")},
            "action": {"type": raw["action_kind"], "value": raw.get("action_value")},
        }
    try:
        return PluginCommand.model_validate(raw)
    except ValidationError:
        log.debug("plugin_command_dropped", command=repr(raw))
        return None


def build_app_collection(applications: Iterable[Any]) -> tuple[AppCandidate, ...]:
    """Deduplicate by display name (first occurrence wins) and sort by name."""
    by_name: dict[str, AppCandidate] = {}
    for raw in applications:
        app = _coerce_app(raw)
        if app is not None:
            by_name.setdefault(app.display_name, app)
    return tuple(sorted(by_name.values(), key=lambda app: app.display_name))


def materialize_command(command: PluginCommand) -> SearchResult | None:
    """Convert a plugin command to result shape, or ``None`` if its action is unusable."""
    kind = command.action_kind
    if kind is ActionKind.URL:
        try:
            _URL_ADAPTER.validate_python(command.action_value)
        except ValidationError:
            log.debug("plugin_command_bad_url", command_id=command.id)
            return None
        return SearchResult(
            id=command.id,
            title=command.title,
            subtitle=command.subtitle,
            source=PLUGIN_SOURCE,
            score=URL_COMMAND_SCORE,
            action=OpenURL(url=command.action_value),
        )
    if kind is ActionKind.SHELL:
        return SearchResult(
            id=command.id,
            title=command.title,
            subtitle=command.subtitle,
            source=PLUGIN_SOURCE,
            score=SHELL_COMMAND_SCORE,
            action=RunShellCommand(command=command.action_value),
        )
    log.debug("plugin_command_unsupported", command_id=command.id, type=command.action.type)
    return None


def build_command_collection(plugin_commands: Iterable[Any]) -> tuple[SearchResult, ...]:
    results = []
    for raw in plugin_commands:
        command = _coerce_command(raw)
        if command is None:
            continue
        result = materialize_command(command)
        if result is not None:
            results.append(result)
    return tuple(results)


def _app_result(app: AppCandidate, score: int) -> SearchResult:
    return SearchResult(
        id=f"app:{app.locator}",
        title=app.display_name,
        subtitle=app.locator,
        source=APP_SOURCE,
        score=score,
        action=OpenApplication(path=app.locator),
    )


class SearchIndex:
    """Snapshot-swapped index answering launcher queries."""

    def __init__(
        self,
        *,
        suggestion_count: int = 12,
        suggestion_score: int = 120,
        browse_limit: int = 24,
        result_limit: int = 40,
        command_boost: int = 100,
    ) -> None:
        self.suggestion_count = suggestion_count
        self.suggestion_score = suggestion_score
        self.browse_limit = browse_limit
        self.result_limit = result_limit
        self.command_boost = command_boost

        self._snapshot = IndexSnapshot()
        self._write_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> SearchIndex:
        return cls(
            suggestion_count=settings.suggestion_count,
            suggestion_score=settings.suggestion_score,
            browse_limit=settings.browse_limit,
            result_limit=settings.result_limit,
            command_boost=settings.command_boost,
        )

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    @property
    def is_rebuilding(self) -> bool:
        """Advisory: True while a rebuild holds the writer lock."""
        return self._write_lock.locked()

    @property
    def app_count(self) -> int:
        return len(self._snapshot.apps)

    @property
    def command_count(self) -> int:
        return len(self._snapshot.commands)

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------

    def rebuild(self, applications: Iterable[Any], plugin_commands: Iterable[Any]) -> None:
        """Replace both collections atomically.

        ``applications`` holds ``AppCandidate`` instances, ``(display_name,
        locator)`` pairs or mappings; ``plugin_commands`` holds ``PluginCommand``
        instances or mappings, either in manifest shape (``action: {type,
        value}``) or flat (``action_kind``/``action_value``). Malformed entries
        are dropped.
        Concurrent callers are serialized.
        """
        with self._write_lock:
            snapshot = IndexSnapshot(
                apps=build_app_collection(applications),
                commands=build_command_collection(plugin_commands),
            )
            self._snapshot = snapshot
        log.info("index_rebuilt", apps=len(snapshot.apps), commands=len(snapshot.commands))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[SearchResult]:
        snapshot = self._snapshot
        if not query.strip():
            return self._browse(snapshot)

        app_matches = []
        for app in snapshot.apps:
            app_score = matcher.score(query, app.display_name)
            if app_score > 0:
                app_matches.append(_app_result(app, app_score))

        command_matches = []
        for command in snapshot.commands:
            title_score = matcher.score(query, command.title)
            subtitle_score = matcher.score(query, command.subtitle) // 2
            command_score = max(title_score, subtitle_score)
            if command_score > 0:
                command_matches.append(
                    command.model_copy(update={"score": command_score + self.command_boost})
                )

        matches = app_matches + command_matches
        matches.sort(key=lambda result: (-result.score, result.title))
        return matches[: self.result_limit]

    def _browse(self, snapshot: IndexSnapshot) -> list[SearchResult]:
        """Default list for an empty query: leading apps plus every command."""
        suggestions = [
            _app_result(app, self.suggestion_score)
            for app in snapshot.apps[: self.suggestion_count]
        ]
        browse = suggestions + [command.model_copy() for command in snapshot.commands]
        browse.sort(key=lambda result: -result.score)
        return browse[: self.browse_limit]
