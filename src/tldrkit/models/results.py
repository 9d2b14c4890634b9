from __future__ import annotations

from pydantic import BaseModel


class ResultItem(BaseModel):
    """One row of a launcher result list."""

    title: str
    subtitle: str = ""
    arg: str | None = None
    autocomplete: str | None = None
    valid: bool = True


class ResultList(BaseModel):
    items: list[ResultItem]
