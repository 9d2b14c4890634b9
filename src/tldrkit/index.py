"""Command index: loading index.json and fuzzy suggestions.

index.json lists every page name in its on-disk form (``git-checkout``), so
queries are hyphen-joined before matching and results are turned back into
the spaced form a user types (``git checkout``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from tldrkit import fuzzy
from tldrkit.errors import ErrorCode, TldrKitError
from tldrkit.models.index import CommandIndex, IndexEntry

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

log = structlog.get_logger()

INDEX_FILE = "index.json"


def load_index(path: Path) -> CommandIndex:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise TldrKitError(
            ErrorCode.IO_FAILED, f"failed to open a index file {path}: {exc}"
        ) from exc

    try:
        index = CommandIndex.model_validate_json(raw)
    except ValidationError as exc:
        raise TldrKitError(
            ErrorCode.DECODE_FAILED, f"failed to decode a index file {path}: {exc}"
        ) from exc

    log.debug("index_loaded", path=str(path), commands=len(index.commands))
    return index


def normalize_query(tokens: Sequence[str]) -> str:
    """Join tokens the way page files are named.

    A token typed with a trailing hyphen (``apt-`` ``get``) must not yield
    a doubled hyphen.
    """
    return re.sub(r"-{2,}", "-", "-".join(tokens))


def search(index: CommandIndex, tokens: Sequence[str]) -> list[IndexEntry]:
    """Rank index entries against the query, best first.

    When the whole query matches nothing, trailing tokens are dropped one at
    a time, so an unknown subcommand still suggests its siblings. Unless the
    user already typed a hyphen, the returned entries are renamed in place
    to their spaced form.
    """
    commands = index.commands
    names = [entry.name for entry in commands]
    query = ""
    matches: list[fuzzy.Match] = []
    for end in range(len(tokens), 0, -1):
        query = normalize_query(tokens[:end])
        matches = fuzzy.find(query, names)
        if matches:
            break

    keep_hyphens = any("-" in token for token in tokens)
    results: list[IndexEntry] = []
    for match in matches:
        entry = commands[match.index]
        if not keep_hyphens:
            entry.name = entry.name.replace("-", " ")
        results.append(entry)

    log.debug("index_search", query=query, results=len(results))
    return results
