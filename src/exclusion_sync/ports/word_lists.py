"""Port: spreadsheet-backed word lists."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class WordListSource(Protocol):
    """Fetch first-column values for several ranges in one call.

    Returns one list per requested range, in request order; each list holds
    trimmed, non-empty strings. Any failure raises ``UpstreamFetchError``
    for the whole fetch.
    """

    def fetch(self, spreadsheet_id: str, ranges: Sequence[str]) -> list[list[str]]: ...
