from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ActionKind(StrEnum):
    URL = "url"
    SHELL = "shell"
    UNKNOWN = "unknown"


class AppCandidate(BaseModel):
    """An installed application as reported by discovery."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(min_length=1)
    locator: str  # Bundle path; opaque to the engine


class PluginCommandAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    value: str


class PluginCommand(BaseModel):
    """Single command entry in a plugin manifest."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    subtitle: str
    action: PluginCommandAction

    @property
    def action_kind(self) -> ActionKind:
        try:
            return ActionKind(self.action.type.lower())
        except ValueError:
            return ActionKind.UNKNOWN

    @property
    def action_value(self) -> str:
        return self.action.value


class PluginManifest(BaseModel):
    """Contents of one plugin manifest file."""

    name: str
    commands: list[PluginCommand] = []


class LoadedPlugin(BaseModel):
    name: str
    path: str
    commands: list[PluginCommand]
