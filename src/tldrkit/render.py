"""Presentation of pages and suggestions.

Two targets: colored terminal text via rich, and a launcher result list
(``ResultItem`` rows) that the CLI prints as JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from rich.text import Text

from tldrkit.config import DEFAULT_PLATFORM
from tldrkit.language import choose_platform
from tldrkit.models.platform import Platform
from tldrkit.models.results import ResultItem
from tldrkit.parser import CommandFormat, format_command, more_info_url

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from tldrkit.models.index import IndexEntry
    from tldrkit.models.page import Page

log = structlog.get_logger()


def suggestion_autocomplete(entry: IndexEntry, selected: Platform) -> str:
    """Query to complete a suggestion with, including ``-p`` when needed."""
    platform = choose_platform(entry.platforms, selected)
    if platform in (Platform.COMMON, DEFAULT_PLATFORM):
        return entry.name
    return f"-p {platform} {entry.name}"


# ----------------------------------------------------------------------
# Terminal
# ----------------------------------------------------------------------


def render_page(page: Page, console: Console, command_format: CommandFormat = "original") -> None:
    console.print()
    console.print(Text(page.name, style="bold"))
    console.print()
    for line in page.descriptions:
        console.print(Text(line, style="italic"))
    for example in page.examples:
        console.print()
        console.print(Text(f"- {example.description}", style="green"))
        console.print(Text(f"  {format_command(example.command, command_format)}", style="cyan"))
    console.print()


def render_suggestions(
    entries: Sequence[IndexEntry], console: Console, selected: Platform = DEFAULT_PLATFORM
) -> None:
    if not entries:
        console.print("No matching query. Try a different query.")
        return

    console.print("Did you mean:")
    for entry in entries:
        line = Text("  ")
        line.append(suggestion_autocomplete(entry, selected), style="bold cyan")
        line.append(f"  (platforms: {', '.join(entry.platforms)})", style="dim")
        console.print(line)


# ----------------------------------------------------------------------
# Launcher result list
# ----------------------------------------------------------------------


def page_result_items(page: Page, command_format: CommandFormat = "original") -> list[ResultItem]:
    """The description row followed by one row per example."""
    items: list[ResultItem] = []
    if page.descriptions:
        try:
            url: str | None = more_info_url(page.descriptions)
        except ValueError as exc:
            log.debug("more_info_url_unavailable", page=page.name, reason=str(exc))
            url = None
        items.append(
            ResultItem(title=page.summary, subtitle=page.detail, arg=url, valid=False)
        )

    for example in page.examples:
        command = format_command(example.command, command_format)
        items.append(ResultItem(title=command, subtitle=example.description, arg=command))
    return items


def suggestion_result_items(
    entries: Sequence[IndexEntry], selected: Platform = DEFAULT_PLATFORM
) -> list[ResultItem]:
    return [
        ResultItem(
            title=entry.name,
            subtitle=f"Platforms: {','.join(entry.platforms)}",
            autocomplete=suggestion_autocomplete(entry, selected),
            valid=False,
        )
        for entry in entries
    ]
