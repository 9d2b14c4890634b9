"""Integration test fixtures.

Provides a CliRunner and an environment that points the CLI at a mirror
under tmp_path. Page and archive fixtures come from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

if TYPE_CHECKING:
    from pathlib import Path

SOURCE_URL = "https://example.com/assets/tldr.zip"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_env(mirror: Path) -> dict[str, str]:
    """Environment for a CLI run against the pre-built mirror."""
    return {
        "TLDRKIT__MIRROR__PATH": str(mirror),
        "TLDRKIT__MIRROR__SOURCE_URL": SOURCE_URL,
        "TLDRKIT__OUTPUT__COLOR": "false",
        "COLUMNS": "200",
    }
