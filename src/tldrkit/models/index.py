from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IndexEntry(BaseModel):
    """Single command in index.json.

    ``name`` is left mutable: search rewrites it to its display form.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    platforms: list[str] = Field(default_factory=list, alias="platform")
    languages: list[str] = Field(default_factory=list, alias="language")


class CommandIndex(BaseModel):
    """Top-level shape of index.json."""

    commands: list[IndexEntry] = []
