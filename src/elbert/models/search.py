from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from elbert.models.actions import LauncherAction


class SearchResult(BaseModel):
    """Single ranked entry returned by SearchIndex.search."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    subtitle: str
    source: str  # "App" | "Plugin"
    score: int
    action: LauncherAction
