"""End-to-end refresh: discovery and manifests feeding the index."""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

from elbert.models import OpenApplication, OpenURL, RunShellCommand

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

    from elbert.state import AppState


class TestRefresh:
    async def test_refresh_populates_index(self, app_state: AppState) -> None:
        assert app_state.search("") == []

        await app_state.refresh()

        assert app_state.index.app_count == 4
        # The applescript command is dropped at rebuild
        assert app_state.index.command_count == 2
        assert app_state.is_refreshing is False

    async def test_search_after_refresh(self, app_state: AppState, app_root: Path) -> None:
        await app_state.refresh()

        [firefox] = app_state.search("firefox")
        assert firefox.score == 1200
        assert firefox.action == OpenApplication(path=str(app_root / "Firefox.app"))

        [docs] = app_state.search("python docs")
        assert docs.source == "Plugin"
        assert docs.score == 1300
        assert docs.action == OpenURL(url="https://docs.python.org")

        [flush] = app_state.search("flush")
        assert flush.action == RunShellCommand(command="dscacheutil -flushcache")

    async def test_browse_list_after_refresh(self, app_state: AppState) -> None:
        await app_state.refresh()
        titles = [r.title for r in app_state.search("")]
        assert titles == ["Python Docs", "Flush DNS", "Firefox", "Notes", "Safari", "Terminal"]

    async def test_refresh_replaces_removed_candidates(
        self, app_state: AppState, app_root: Path, plugin_dir: Path
    ) -> None:
        await app_state.refresh()
        assert app_state.search("safari")

        for path in sorted((app_root / "Safari.app").rglob("*"), reverse=True):
            path.rmdir()
        (app_root / "Safari.app").rmdir()
        (plugin_dir / "dev-tools.json").unlink()

        await app_state.refresh()
        assert app_state.search("safari") == []
        assert app_state.search("flush") == []
        assert app_state.index.command_count == 0

    async def test_concurrent_refreshes_settle(self, app_state: AppState) -> None:
        await asyncio.gather(app_state.refresh(), app_state.refresh(), app_state.refresh())
        assert app_state.is_refreshing is False
        assert app_state.index.app_count == 4
        assert app_state.index.command_count == 2

    async def test_is_refreshing_while_any_refresh_pending(
        self, app_state: AppState, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        entered = threading.Event()
        release = threading.Event()
        original_rebuild = app_state.index.rebuild
        calls = 0

        def held_rebuild(apps, commands) -> None:
            nonlocal calls
            calls += 1
            if calls == 1:
                entered.set()
                release.wait(timeout=5)
            original_rebuild(apps, commands)

        monkeypatch.setattr(app_state.index, "rebuild", held_rebuild)

        held = asyncio.create_task(app_state.refresh())
        assert await asyncio.to_thread(entered.wait, 5)

        # A refresh that starts and finishes meanwhile must not clear the flag
        await app_state.refresh()
        assert app_state.is_refreshing is True

        release.set()
        await held
        assert app_state.is_refreshing is False
        assert app_state.index.app_count == 4
