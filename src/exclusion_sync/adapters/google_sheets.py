"""Adapter: Google Sheets word lists (read-only, API key auth).

Implements WordListSource with ``spreadsheets.values.batchGet`` so both
lists come back from a single request.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import UpstreamFetchError

_LOGGER = logging.getLogger("exclusion_sync.sheets")


class SheetsWordListSource:
    """Reads the first column of each requested range."""

    def __init__(
        self,
        api_key: str,
        application_name: str = "exclusion-sync",
        service: Any = None,
    ) -> None:
        """
        Args:
            api_key: Google API key with Sheets read access
            application_name: Reported in the client's user agent
            service: Pre-built Sheets service (built lazily when None)
        """
        self._api_key = api_key
        self._application_name = application_name
        self._service = service

    @property
    def service(self) -> Any:
        """Get or build the Sheets API service."""
        if self._service is None:
            self._service = build(
                "sheets",
                "v4",
                developerKey=self._api_key,
                cache_discovery=False,
            )
        return self._service

    def fetch(self, spreadsheet_id: str, ranges: Sequence[str]) -> list[list[str]]:
        """
        Fetch trimmed, non-empty first-column values for every range.

        Returns:
            One list per range, in the order the ranges were given

        Raises:
            UpstreamFetchError: If the Sheets call fails or returns fewer ranges than asked for
        """
        ranges = list(ranges)
        try:
            response = (
                self.service.spreadsheets()
                .values()
                .batchGet(spreadsheetId=spreadsheet_id, ranges=ranges, majorDimension="ROWS")
                .execute()
            )
        except HttpError as e:
            _LOGGER.error("sheets_fetch_failed", extra={"status": e.resp.status, "spreadsheet_id": spreadsheet_id})
            raise UpstreamFetchError(
                f"sheets: batchGet failed with HTTP {e.resp.status}",
                payload={"status": e.resp.status, "reason": str(e)},
            ) from e
        except OSError as e:
            _LOGGER.error("sheets_fetch_failed", extra={"error": str(e), "spreadsheet_id": spreadsheet_id})
            raise UpstreamFetchError(f"sheets: transport error: {e}") from e

        value_ranges = response.get("valueRanges") or []
        if len(value_ranges) != len(ranges):
            raise UpstreamFetchError(
                f"sheets: asked for {len(ranges)} range(s), got {len(value_ranges)}",
                payload=response,
            )
        return [_first_column(vr.get("values") or []) for vr in value_ranges]


def _first_column(rows: list[list[Any]]) -> list[str]:
    words: list[str] = []
    for row in rows:
        if not row:
            continue
        word = str(row[0] if row[0] is not None else "").strip()
        if word:
            words.append(word)
    return words
