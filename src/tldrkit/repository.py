"""Page repository: the on-disk mirror of tldr pages.

Layout under the mirror root::

    index.json
    pages/<platform>/<command>.md          # default language (en)
    pages.<lang>/<platform>/<command>.md   # every other language

The presence of index.json marks an initialised mirror. Lookups walk the
candidate platforms (outer loop) and languages (inner loop) in priority
order and stop at the first page file that exists.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from tldrkit.cache import CacheFile
from tldrkit.config import PAGE_SOURCE_URL
from tldrkit.errors import ErrorCode, TldrKitError
from tldrkit.fetcher import Fetcher, build_http_client
from tldrkit.index import INDEX_FILE, load_index
from tldrkit.language import language_priorities, pages_dir_name, platform_priorities
from tldrkit.parser import parse_page_file

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import timedelta

    from tldrkit.models.index import CommandIndex
    from tldrkit.models.page import Page
    from tldrkit.models.platform import Platform

log = structlog.get_logger()

PAGE_SUFFIX = ".md"


def _exists(path: Path) -> bool:
    """Like ``Path.exists`` but only "no such file" counts as absent.

    Any other stat failure (a directory without search permission, say) is
    raised as ``IO_FAILED`` instead of being mistaken for a missing page.
    """
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise TldrKitError(ErrorCode.IO_FAILED, f"failed to access {path}: {exc}") from exc
    return True


class PageRepository:
    """A local mirror of tldr pages plus the lookup rules over it."""

    def __init__(
        self,
        path: Path | str,
        *,
        source_url: str = PAGE_SOURCE_URL,
        platform: Platform | None = None,
        language: str | None = None,
        force_update: bool = False,
        fetcher: Fetcher | None = None,
    ) -> None:
        self._path = Path(path).expanduser()
        self._source_url = source_url
        self._platforms = platform_priorities(platform)
        self._languages = language_priorities(language)
        self._force_update = force_update
        self._fetcher = fetcher

    @property
    def path(self) -> Path:
        return self._path

    @property
    def index_path(self) -> Path:
        return self._path / INDEX_FILE

    @property
    def platforms(self) -> tuple[Platform, ...]:
        return tuple(self._platforms)

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self._languages)

    # ------------------------------------------------------------------
    # Mirror lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Create the mirror on first use and refresh it when required.

        Raises ``MIRROR_CORRUPT`` if index.json is still missing afterwards.
        """
        needs_update = self._force_update
        if not _exists(self._path):
            try:
                self._path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise TldrKitError(
                    ErrorCode.IO_FAILED, f"failed to create tldr dir {self._path}: {exc}"
                ) from exc
            log.info("mirror_created", path=str(self._path))
            needs_update = True

        if needs_update:
            await self.update()

        if not _exists(self.index_path):
            raise TldrKitError(
                ErrorCode.MIRROR_CORRUPT, f"tldr database is broken {self.index_path}"
            )

    async def update(self) -> None:
        """Replace the mirror contents with a fresh copy of the remote archive."""
        log.info("mirror_update_started", url=self._source_url, path=str(self._path))
        try:
            if self._fetcher is not None:
                await self._fetcher.fetch_and_unpack(self._source_url, self._path)
            else:
                async with build_http_client() as client:
                    await Fetcher(client).fetch_and_unpack(self._source_url, self._path)
        except TldrKitError as exc:
            log.warning("mirror_update_failed", url=self._source_url, error=exc.message)
            raise TldrKitError(
                ErrorCode.FETCH_FAILED,
                f"failed to update tldr repository from {self._source_url}: {exc.message}",
                recoverable=True,
            ) from exc
        log.info("mirror_update_complete", url=self._source_url)

    def expired(self, max_age: timedelta) -> bool:
        """True when index.json is older than ``max_age`` or cannot be read."""
        try:
            index_file = CacheFile(self._path, INDEX_FILE, max_age)
        except OSError:
            return True
        return index_file.expired()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def page_candidates(self, tokens: Sequence[str]) -> list[Path]:
        """Every path ``find_page`` would probe, in probe order."""
        filename = "-".join(tokens) + PAGE_SUFFIX
        return [
            self._path / pages_dir_name(language) / platform.value / filename
            for platform in self._platforms
            for language in self._languages
        ]

    def find_page(self, tokens: Sequence[str]) -> Page:
        """Return the first page matching ``tokens`` in candidate order.

        Raises ``PAGE_NOT_FOUND`` when no candidate file exists. A candidate
        that exists but cannot be read, or whose directory cannot be searched,
        raises ``IO_FAILED`` instead of falling through to the next one.
        """
        if not tokens:
            raise TldrKitError(ErrorCode.PAGE_NOT_FOUND, "no command given", recoverable=True)

        for path in self.page_candidates(tokens):
            if not _exists(path):
                continue
            page = parse_page_file(path)
            log.debug("page_found", path=str(path))
            return page

        filename = "-".join(tokens) + PAGE_SUFFIX
        raise TldrKitError(
            ErrorCode.PAGE_NOT_FOUND, f"failed to find {filename}: no page found", recoverable=True
        )

    def load_index(self) -> CommandIndex:
        return load_index(self.index_path)
