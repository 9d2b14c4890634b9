"""Error types shared by the mirror, lookup and index layers.

Every failure the core can report is a ``TldrKitError`` tagged with an
``ErrorCode``. Callers branch on ``error.code`` (never on the message text);
the underlying exception, when there is one, is chained via ``__cause__``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    MIRROR_CORRUPT = "MIRROR_CORRUPT"
    FETCH_FAILED = "FETCH_FAILED"
    IO_FAILED = "IO_FAILED"
    DECODE_FAILED = "DECODE_FAILED"
    INVALID_PLATFORM = "INVALID_PLATFORM"


class TldrKitError(Exception):
    """A classified failure with a stable code and a recoverability hint."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return f"TldrKitError(code={self.code.value!r}, message={self.message!r})"
