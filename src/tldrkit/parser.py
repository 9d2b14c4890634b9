"""Parser for tldr page markup.

A page is a small line-oriented dialect of markdown::

    # tar

    > Archiving utility.
    > More information: <https://www.gnu.org/software/tar>.

    - Create an archive from files:

    `tar cf {{target.tar}} {{file1}} {{file2}}`

Each non-blank line is classified by its first character. Anything that
does not fit is ignored, so malformed pages degrade to partial results
rather than errors.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Literal

from tldrkit.errors import ErrorCode, TldrKitError
from tldrkit.models.page import Example, Page

CommandFormat = Literal["original", "remove", "single", "uppercase"]

_PLACEHOLDER = re.compile(r"\{\{(.*?)\}\}")


def parse_page(lines: Iterable[str]) -> Page:
    """Build a Page from ``lines`` in a single pass, in document order."""
    name = ""
    descriptions: list[str] = []
    examples: list[Example] = []
    pending = ""

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        if line.startswith("#"):
            name = line.lstrip("#").strip()
        elif line.startswith(">"):
            descriptions.append(line.lstrip(">").strip())
        elif line.startswith("-"):
            pending = line.lstrip("-").strip()
        elif line.startswith("`"):
            examples.append(Example(description=pending, command=line.strip("`").strip()))

    return Page(name=name, descriptions=tuple(descriptions), examples=tuple(examples))


def parse_page_file(path: Path) -> Page:
    try:
        with path.open(encoding="utf-8") as f:
            return parse_page(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise TldrKitError(ErrorCode.IO_FAILED, f"failed to open the page ({path}): {exc}") from exc


def more_info_url(descriptions: tuple[str, ...] | list[str]) -> str:
    """Extract the URL of a ``More information: <https://...>.`` line.

    Only the last description line is considered, as the style guide
    always puts the link there. Raises ``ValueError`` if there is none.
    """
    if not descriptions:
        raise ValueError("no descriptions")

    line = descriptions[-1]
    for scheme in ("https://", "http://"):
        first = line.find("<" + scheme)
        last = line.rfind(">.")
        if first < 0 or last < 0:
            continue
        if last < first:
            raise ValueError(f"found URL in descriptions but something wrong {line}")
        return line[first + 1 : last]
    raise ValueError("not found URL in descriptions")


def format_command(command: str, style: CommandFormat = "original") -> str:
    """Rewrite ``{{placeholder}}`` markers for display."""
    if style == "remove":
        return _PLACEHOLDER.sub(r"\1", command)
    if style == "single":
        return _PLACEHOLDER.sub(r"{\1}", command)
    if style == "uppercase":
        return _PLACEHOLDER.sub(lambda m: m.group(1).upper(), command)
    return command
