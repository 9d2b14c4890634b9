"""Unit-specific fixtures (filesystem only, no network)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tldrkit.index import load_index

if TYPE_CHECKING:
    from pathlib import Path

    from tldrkit.models.index import CommandIndex


@pytest.fixture()
def index(mirror: Path) -> CommandIndex:
    """A freshly loaded index; search renames entries, so never share one."""
    return load_index(mirror / "index.json")
