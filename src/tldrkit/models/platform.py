from __future__ import annotations

from enum import StrEnum

from tldrkit.errors import ErrorCode, TldrKitError


class Platform(StrEnum):
    """Sub-directory of a pages tree that a page is filed under."""

    COMMON = "common"
    LINUX = "linux"
    OSX = "osx"
    WINDOWS = "windows"
    SUNOS = "sunos"

    @classmethod
    def parse(cls, value: str) -> Platform:
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = "/".join(p.value for p in cls if p is not cls.COMMON)
            raise TldrKitError(
                ErrorCode.INVALID_PLATFORM,
                f"{value} is unsupported platform, supported are {supported}",
            ) from None
