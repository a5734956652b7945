"""Error types for the settings boundary.

The directory client, cache and renderers never raise: every failure there
collapses to an empty informer list or an empty ID. ``MeteoprogError`` is
reserved for administrative actions that must hard-stop (authorization,
rejected API keys, failed refreshes).
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    FORBIDDEN = "FORBIDDEN"
    INVALID_API_KEY = "INVALID_API_KEY"
    REFRESH_FAILED = "REFRESH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class MeteoprogError(Exception):
    """Raised by settings actions. Carries a stable code for callers."""

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
