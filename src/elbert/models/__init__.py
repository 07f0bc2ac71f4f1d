from __future__ import annotations

from elbert.models.actions import LauncherAction, OpenApplication, OpenURL, RunShellCommand
from elbert.models.candidates import (
    ActionKind,
    AppCandidate,
    LoadedPlugin,
    PluginCommand,
    PluginCommandAction,
    PluginManifest,
)
from elbert.models.search import SearchResult

__all__ = [
    # actions
    "LauncherAction",
    "OpenApplication",
    "OpenURL",
    "RunShellCommand",
    # candidates
    "ActionKind",
    "AppCandidate",
    "PluginCommand",
    "PluginCommandAction",
    "PluginManifest",
    "LoadedPlugin",
    # search
    "SearchResult",
]
