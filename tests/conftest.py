"""Shared fixtures: a small candidate set and an index built from it."""

from __future__ import annotations

import pytest

from elbert.index import SearchIndex
from elbert.models import AppCandidate, PluginCommand, PluginCommandAction


def make_command(
    command_id: str,
    title: str,
    subtitle: str = "",
    action_type: str = "shell",
    value: str = "true",
) -> PluginCommand:
    return PluginCommand(
        id=command_id,
        title=title,
        subtitle=subtitle,
        action=PluginCommandAction(type=action_type, value=value),
    )


@pytest.fixture()
def sample_apps() -> list[AppCandidate]:
    return [
        AppCandidate(display_name="Safari", locator="/Applications/Safari.app"),
        AppCandidate(display_name="Firefox", locator="/Applications/Firefox.app"),
        AppCandidate(display_name="Finder", locator="/System/Library/CoreServices/Finder.app"),
        AppCandidate(display_name="Notes", locator="/Applications/Notes.app"),
    ]


@pytest.fixture()
def sample_commands() -> list[PluginCommand]:
    return [
        make_command(
            "open-apple", "Open Apple", "https://apple.com", "url", "https://apple.com"
        ),
        make_command("notes", "Notes", "Take notes", "shell", "open -a Notes"),
        make_command("script", "Run Script", "osascript", "applescript", "beep"),
        make_command("broken-url", "Broken Link", "nowhere", "url", "not a url"),
    ]


@pytest.fixture()
def index(sample_apps: list[AppCandidate], sample_commands: list[PluginCommand]) -> SearchIndex:
    idx = SearchIndex()
    idx.rebuild(sample_apps, sample_commands)
    return idx
