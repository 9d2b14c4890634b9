"""Freshness of the local mirror.

Freshness is never stored: it is derived from a file's modification time.
A file whose metadata cannot be read counts as expired, so a broken or
missing mirror always asks for a refresh instead of looking fresh.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import structlog

log = structlog.get_logger()


def file_age(path: Path) -> timedelta:
    """Time elapsed since ``path`` was last modified. Raises ``OSError``."""
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
    return datetime.now(UTC) - mtime


def is_expired(path: Path, max_age: timedelta) -> bool:
    try:
        age = file_age(path)
    except OSError:
        log.debug("cache_age_unavailable", path=str(path))
        return True
    return age > max_age


class CacheFile:
    """A single cached file with a maximum age."""

    def __init__(self, directory: Path, filename: str, max_age: timedelta) -> None:
        if not directory.is_dir():
            raise FileNotFoundError(f"{directory} directory does not exist")
        self._directory = directory
        self._filename = filename
        self._max_age = max_age

    @property
    def path(self) -> Path:
        return self._directory / self._filename

    def exists(self) -> bool:
        return self.path.exists()

    def age(self) -> timedelta:
        return file_age(self.path)

    def expired(self) -> bool:
        return is_expired(self.path, self._max_age)

    def not_expired(self) -> bool:
        return not self.expired()

    def clear(self) -> None:
        """Remove the cached file if it exists."""
        self.path.unlink(missing_ok=True)
