from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Example(BaseModel):
    """One example of a page: a description line and the command after it."""

    model_config = ConfigDict(frozen=True)

    description: str
    command: str  # Raw template, {{placeholders}} kept as written


class Page(BaseModel):
    """A parsed reference page for one command."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    descriptions: tuple[str, ...] = ()
    examples: tuple[Example, ...] = ()

    @property
    def summary(self) -> str:
        return self.descriptions[0] if self.descriptions else ""

    @property
    def detail(self) -> str:
        """Second description line, usually a caveat or the info URL."""
        return self.descriptions[1] if len(self.descriptions) >= 2 else ""
