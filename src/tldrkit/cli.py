"""Command line interface for tldrkit."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import structlog
import typer
from rich.console import Console

from tldrkit import __version__
from tldrkit.config import Settings
from tldrkit.errors import ErrorCode, TldrKitError
from tldrkit.index import search
from tldrkit.logging_config import configure_logging
from tldrkit.models.platform import Platform
from tldrkit.models.results import ResultItem, ResultList
from tldrkit.render import (
    page_result_items,
    render_page,
    render_suggestions,
    suggestion_result_items,
)
from tldrkit.repository import PageRepository

log = structlog.get_logger()

EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


app = typer.Typer(
    help="Show command examples from a local mirror of tldr pages.",
    add_completion=False,
    no_args_is_help=False,
)


async def _initialize(repository: PageRepository, timeout: float) -> None:
    async with asyncio.timeout(timeout):
        await repository.initialize()


def _emit_items(items: list[ResultItem]) -> None:
    typer.echo(ResultList(items=items).model_dump_json(exclude_none=True))


@app.command()
def main(
    command: list[str] | None = typer.Argument(None, help="Command to look up, e.g. git checkout"),
    platform: str | None = typer.Option(
        None,
        "--platform",
        "-p",
        help="Select from linux/osx/sunos/windows.",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        "-L",
        help="Select language, e.g. en.",
    ),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Suggest similar commands on a miss."),
    update: bool = typer.Option(False, "--update", "-u", help="Update the tldr database."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        help="Output as colored text or as a JSON result list.",
    ),
    version: bool = typer.Option(False, "--version", "-v", help="Show the client version."),
) -> None:
    """Look up a command page; with --fuzzy, suggest close matches on a miss."""
    if version:
        typer.echo(f"tldrkit {__version__}")
        raise typer.Exit()

    lookup: dict[str, Any] = {}
    if language:
        lookup["language"] = language
    if fuzzy:
        lookup["fuzzy"] = True
    settings = Settings(lookup=lookup) if lookup else Settings()
    configure_logging(settings.logging)

    console = Console(no_color=not settings.output.color, highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        selected = Platform.parse(platform) if platform else settings.lookup.platform
    except TldrKitError as exc:
        err_console.print(exc.message)
        raise typer.Exit(code=EXIT_ERROR) from None

    repository = PageRepository(
        settings.mirror.path,
        source_url=settings.mirror.source_url,
        platform=selected,
        language=settings.lookup.language,
        force_update=update,
    )

    try:
        asyncio.run(_initialize(repository, settings.mirror.update_timeout_seconds))
    except TimeoutError:
        err_console.print("update failed due to timeout")
        raise typer.Exit(code=EXIT_ERROR) from None
    except TldrKitError as exc:
        prefix = "update failed due to " if update else ""
        err_console.print(f"{prefix}{exc.message}")
        raise typer.Exit(code=EXIT_ERROR) from None

    if update:
        console.print("update succeeded")
        return

    if not command:
        console.print("Please input a command, e.g. tldrkit tar")
        return

    if repository.expired(settings.mirror.max_age):
        err_console.print(
            f"The tldr database is older than {settings.mirror.max_age_days} days. "
            "Run `tldrkit --update` to refresh it."
        )

    try:
        page = repository.find_page(command)
    except TldrKitError as exc:
        if exc.code is not ErrorCode.PAGE_NOT_FOUND:
            err_console.print(exc.message)
            raise typer.Exit(code=EXIT_ERROR) from None
        _report_not_found(
            repository, command, settings, selected, output_format, console, err_console
        )
        raise typer.Exit(code=EXIT_NOT_FOUND) from None

    if output_format is OutputFormat.json:
        _emit_items(page_result_items(page, settings.output.command_format))
    else:
        render_page(page, console, settings.output.command_format)


def _report_not_found(
    repository: PageRepository,
    command: list[str],
    settings: Settings,
    selected: Platform,
    output_format: OutputFormat,
    console: Console,
    err_console: Console,
) -> None:
    log.info("page_not_found", command=command, languages=repository.languages)
    if settings.lookup.language:
        message = "Not found the command in selected language. Try not to specify language option."
        if output_format is OutputFormat.json:
            _emit_items([ResultItem(title=message, valid=False)])
        else:
            console.print(message)
        return

    if not settings.lookup.fuzzy:
        if output_format is OutputFormat.json:
            _emit_items([])
        else:
            console.print("No matching page. Try a different query or --fuzzy.")
        return

    try:
        index = repository.load_index()
    except TldrKitError as exc:
        err_console.print(exc.message)
        raise typer.Exit(code=EXIT_ERROR) from None

    suggestions = search(index, command)
    if output_format is OutputFormat.json:
        _emit_items(suggestion_result_items(suggestions, selected))
    else:
        render_suggestions(suggestions, console, selected)


if __name__ == "__main__":
    app()
