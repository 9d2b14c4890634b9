"""Download and unpack the pages archive.

The archive is streamed to a file next to the mirror, unpacked over the
existing tree entry by entry, and then removed. Every failure (transport,
HTTP status, corrupt or empty archive, filesystem) is reported uniformly as
``FETCH_FAILED``; nothing is retried here.

The coroutine yields to the event loop after every downloaded chunk and
before every archive entry, so wrapping a call in ``asyncio.timeout()``
bounds both phases. An interrupted unpack leaves some files updated and
others not; the next full update overwrites them all.
"""

from __future__ import annotations

import asyncio
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath

import httpx
import structlog

from tldrkit import __version__
from tldrkit.errors import ErrorCode, TldrKitError

log = structlog.get_logger()

_DEFAULT_ARCHIVE_NAME = "tldr.zip"

# zipfile reports unsupported compression, encrypted entries and truncated
# member data as NotImplementedError, RuntimeError and EOFError.
_CORRUPT_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
)


def build_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Create the shared httpx client used for archive downloads."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": f"tldrkit/{__version__}"},
    )


def archive_filename(url: str) -> str:
    name = PurePosixPath(httpx.URL(url).path).name
    return name or _DEFAULT_ARCHIVE_NAME


class Fetcher:
    """Fetches a remote zip archive into a local directory."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_and_unpack(self, url: str, dest_dir: Path) -> None:
        archive_path = dest_dir / archive_filename(url)
        try:
            await self._download(url, archive_path)
            await self._unpack(url, archive_path, dest_dir)
        finally:
            archive_path.unlink(missing_ok=True)

    async def _download(self, url: str, archive_path: Path) -> None:
        log.info("archive_download_started", url=url, path=str(archive_path))
        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise TldrKitError(
                        ErrorCode.FETCH_FAILED,
                        f"http response code was {response.status_code} "
                        f"for downloading from {url}",
                        recoverable=True,
                    )
                with archive_path.open("wb") as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
        except httpx.HTTPError as exc:
            raise TldrKitError(
                ErrorCode.FETCH_FAILED,
                f"failed to download from {url}: {exc}",
                recoverable=True,
            ) from exc
        except OSError as exc:
            raise TldrKitError(
                ErrorCode.FETCH_FAILED,
                f"failed to write {archive_path} while downloading from {url}: {exc}",
                recoverable=True,
            ) from exc

    async def _unpack(self, url: str, archive_path: Path, dest_dir: Path) -> None:
        try:
            with zipfile.ZipFile(archive_path) as archive:
                entries = archive.infolist()
                if not entries:
                    raise TldrKitError(
                        ErrorCode.FETCH_FAILED,
                        f"no files in a zip downloaded from {url}",
                        recoverable=True,
                    )

                root = dest_dir.resolve()
                for info in entries:
                    await asyncio.sleep(0)
                    _extract_entry(archive, info, root)
        except _CORRUPT_ARCHIVE_ERRORS as exc:
            raise TldrKitError(
                ErrorCode.FETCH_FAILED,
                f"corrupt archive downloaded from {url}: {exc}",
                recoverable=True,
            ) from exc
        except OSError as exc:
            raise TldrKitError(
                ErrorCode.FETCH_FAILED,
                f"failed to unzip archive from {url} into {dest_dir}: {exc}",
                recoverable=True,
            ) from exc

        log.info("archive_unpacked", url=url, dest=str(dest_dir), entries=len(entries))


def _extract_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, root: Path) -> None:
    target = (root / info.filename).resolve()
    if not target.is_relative_to(root):
        raise TldrKitError(
            ErrorCode.FETCH_FAILED,
            f"archive entry {info.filename!r} points outside {root}",
        )

    if info.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    with archive.open(info) as src, target.open("wb") as dst:
        shutil.copyfileobj(src, dst)
