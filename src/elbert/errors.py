"""Error types raised at the edges of the engine.

The matcher and the index are total and never raise. Errors only exist for
the inbound collaborators (manifest files, plugin directory), where the caller
decides whether a failure is fatal or can be skipped.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    MANIFEST_UNREADABLE = "MANIFEST_UNREADABLE"
    MANIFEST_INVALID = "MANIFEST_INVALID"
    PLUGIN_DIRECTORY_UNAVAILABLE = "PLUGIN_DIRECTORY_UNAVAILABLE"


class ElbertError(Exception):
    """Structured error carrying a machine-readable code."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, object]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "recoverable": self.recoverable,
            }
        }
