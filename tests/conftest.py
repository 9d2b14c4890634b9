"""Shared fixtures: sample pages, a pre-built mirror and zip archives."""

from __future__ import annotations

import io
import json
import zipfile
from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from pathlib import Path

LSOF_PAGE = """\
# lsof

> Lists open files and the corresponding processes.

- Find the processes that have a given file open:

`lsof {{path/to/file}}`

- Find the process that opened a local internet port:

`lsof -i :{{port}}`

- Only output the process ID (PID):

`lsof -t {{path/to/file}}`

- List files opened by the given user:

`lsof -u {{username}}`

- List files opened by the given command or process:

`lsof -c {{process_or_command_name}}`

- List files opened by a specific process, given its PID:

`lsof -p {{PID}}`

- List open files in a directory:

`lsof +D {{path/to/directory}}`
"""

GIT_CHECKOUT_PAGE = """\
# git checkout

> Checkout a branch or paths to the working tree.
> More information: <https://git-scm.com/docs/git-checkout>.

- Create and switch to a new branch:

`git checkout -b {{branch_name}}`

- Switch to an existing local branch:

`git checkout {{branch_name}}`
"""

PSTREE_LINUX_PAGE = """\
# pstree

> A convenient tool to show running processes as a tree.
> More information: <https://manned.org/pstree>.

- Display a tree of processes:

`pstree`
"""

LSOF_JA_PAGE = """\
# lsof

> 開いているファイルと対応するプロセスを一覧表示する。

- 指定したファイルを開いているプロセスを探す:

`lsof {{path/to/file}}`
"""

INDEX = {
    "commands": [
        {"name": "apt-get", "platform": ["linux"], "language": ["en"]},
        {"name": "apt-key", "platform": ["linux"], "language": ["en"]},
        {"name": "archey", "platform": ["linux", "osx"], "language": ["en"]},
        {"name": "git-checkout", "platform": ["common"], "language": ["en"]},
        {"name": "git-commit", "platform": ["common"], "language": ["en"]},
        {"name": "html5validator", "platform": ["common"], "language": ["en"]},
        {"name": "lsof", "platform": ["common"], "language": ["en", "ja"]},
        {"name": "pstree", "platform": ["linux"], "language": ["en"]},
    ]
}

MIRROR_FILES = {
    "index.json": json.dumps(INDEX),
    "pages/common/lsof.md": LSOF_PAGE,
    "pages/common/git-checkout.md": GIT_CHECKOUT_PAGE,
    "pages/linux/pstree.md": PSTREE_LINUX_PAGE,
    "pages.ja/common/lsof.md": LSOF_JA_PAGE,
}


def write_tree(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def build_zip(files: dict[str, str]) -> bytes:
    """An in-memory zip holding ``files`` (directories are implicit)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def patch_zip_entry(payload: bytes, *, flag: int = 0, method: int | None = None) -> bytes:
    """Rewrite the flag bits and compression method of a one-entry zip."""
    data = bytearray(payload)
    # (signature, flag offset, method offset) for the local and central headers
    for signature, flag_at, method_at in ((b"PK\x03\x04", 6, 8), (b"PK\x01\x02", 8, 10)):
        pos = data.find(signature)
        data[pos + flag_at] |= flag
        if method is not None:
            data[pos + method_at : pos + method_at + 2] = method.to_bytes(2, "little")
    return bytes(data)


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI runs reconfigure structlog onto a stream that is closed afterwards."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _no_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host locale out of language resolution."""
    monkeypatch.delenv("LANG", raising=False)
    monkeypatch.delenv("LANGUAGE", raising=False)


@pytest.fixture()
def mirror(tmp_path: Path) -> Path:
    """A fully populated mirror directory."""
    root = tmp_path / "mirror"
    write_tree(root, MIRROR_FILES)
    return root


@pytest.fixture()
def mirror_zip() -> bytes:
    return build_zip(MIRROR_FILES)
