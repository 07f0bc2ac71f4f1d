"""Application state: settings, plugin manager and search index wired together."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from elbert.discovery import discover_applications
from elbert.index import SearchIndex
from elbert.plugins import SAMPLE_MANIFEST, PluginManager

if TYPE_CHECKING:
    from elbert.config import Settings
    from elbert.models import SearchResult

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    index: SearchIndex
    plugin_manager: PluginManager
    _in_flight: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        sample = SAMPLE_MANIFEST if settings.plugins.create_sample else None
        return cls(
            settings=settings,
            index=SearchIndex.from_settings(settings.search),
            plugin_manager=PluginManager(settings.plugins.directory, sample_manifest=sample),
        )

    @property
    def is_refreshing(self) -> bool:
        """Advisory: True while any refresh is still pending."""
        return self._in_flight > 0

    async def refresh(self) -> None:
        """Rediscover applications, reload manifests and rebuild the index.

        Filesystem work and the rebuild run in worker threads so the event loop
        keeps serving searches against the previous snapshot meanwhile.
        """
        self._in_flight += 1
        try:
            apps, plugins = await asyncio.gather(
                asyncio.to_thread(
                    discover_applications, self.settings.discovery.application_dirs
                ),
                asyncio.to_thread(self.plugin_manager.reload),
            )
            commands = [command for plugin in plugins for command in plugin.commands]
            await asyncio.to_thread(self.index.rebuild, apps, commands)
        finally:
            self._in_flight -= 1
        log.info("refresh_complete", apps=self.index.app_count, commands=self.index.command_count)

    def search(self, query: str) -> list[SearchResult]:
        return self.index.search(query)
