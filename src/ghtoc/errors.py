from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    FETCH_FAILED = "FETCH_FAILED"
    RENDER_FAILED = "RENDER_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class GhTocError(Exception):
    """Expected failure while reading, fetching or rendering a document.

    The TOC core never raises it; extraction and formatting are total over
    any rendered text. cli.main turns it into an ``error:`` line on stderr
    and exit status 1.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def log_fields(self) -> dict[str, str | bool]:
        """Flat key/value context for a structlog event."""
        return {
            "error_code": str(self.code),
            "error_message": self.message,
            "suggestion": self.suggestion,
            "recoverable": self.recoverable,
        }
