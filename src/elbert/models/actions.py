from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class OpenApplication(BaseModel):
    """Launch an application bundle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["application"] = "application"
    path: str


class OpenURL(BaseModel):
    """Open a URL with the default handler."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["url"] = "url"
    url: str  # Validated once at rebuild, kept as written in the manifest


class RunShellCommand(BaseModel):
    """Run a raw shell command string."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["shell"] = "shell"
    command: str


# The engine only builds and passes these along; execution lives elsewhere.
LauncherAction = Annotated[
    OpenApplication | OpenURL | RunShellCommand,
    Field(discriminator="kind"),
]
