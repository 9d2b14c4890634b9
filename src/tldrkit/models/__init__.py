from __future__ import annotations

from tldrkit.models.index import CommandIndex, IndexEntry
from tldrkit.models.page import Example, Page
from tldrkit.models.platform import Platform
from tldrkit.models.results import ResultItem, ResultList

__all__ = [
    # page
    "Page",
    "Example",
    # index
    "IndexEntry",
    "CommandIndex",
    # platform
    "Platform",
    # results
    "ResultItem",
    "ResultList",
]
