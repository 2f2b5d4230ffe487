"""SheetsWordListSource tests with a fake Sheets service (no network)."""

from __future__ import annotations

import pytest
from googleapiclient.errors import HttpError

from exclusion_sync.adapters.google_sheets import SheetsWordListSource
from exclusion_sync.errors import UpstreamFetchError


class _Resp(dict):
    """Minimal stand-in for an httplib2 response."""

    def __init__(self, status: int, reason: str) -> None:
        super().__init__(status=str(status))
        self.status = status
        self.reason = reason


class FakeSheetsService:
    """Mimics service.spreadsheets().values().batchGet(...).execute()."""

    def __init__(self, response: dict | None = None, error: Exception | None = None) -> None:
        self.response = response or {}
        self.error = error
        self.calls: list[dict] = []

    def spreadsheets(self):
        return self

    def values(self):
        return self

    def batchGet(self, **kwargs):
        self.calls.append(kwargs)
        return self

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.response


class TestSheetsFetch:
    def test_first_column_trimmed_and_non_empty(self):
        service = FakeSheetsService(
            {
                "valueRanges": [
                    {"range": "Лист1!A2:A", "values": [["casino"], ["  loan  "], [""], [], ["bet", "ignored"]]},
                    {"range": "Лист1!B2:B", "values": [["goodcasino.com"]]},
                ]
            }
        )
        source = SheetsWordListSource("key", service=service)
        lists = source.fetch("sheet-1", ["Лист1!A2:A", "Лист1!B2:B"])

        assert lists == [["casino", "loan", "bet"], ["goodcasino.com"]]
        assert service.calls == [
            {"spreadsheetId": "sheet-1", "ranges": ["Лист1!A2:A", "Лист1!B2:B"], "majorDimension": "ROWS"}
        ]

    def test_range_without_values_is_empty_list(self):
        service = FakeSheetsService({"valueRanges": [{"range": "A"}, {"range": "B", "values": [["x"]]}]})
        lists = SheetsWordListSource("key", service=service).fetch("sheet-1", ["A", "B"])
        assert lists == [[], ["x"]]

    def test_missing_ranges_raise(self):
        service = FakeSheetsService({"valueRanges": [{"range": "A", "values": [["x"]]}]})
        with pytest.raises(UpstreamFetchError):
            SheetsWordListSource("key", service=service).fetch("sheet-1", ["A", "B"])

    def test_http_error_raises_fetch_error(self):
        error = HttpError(_Resp(403, "Forbidden"), b'{"error": {"message": "API key not valid"}}')
        service = FakeSheetsService(error=error)
        with pytest.raises(UpstreamFetchError) as exc_info:
            SheetsWordListSource("key", service=service).fetch("sheet-1", ["A", "B"])
        assert exc_info.value.payload["status"] == 403

    def test_transport_error_raises_fetch_error(self):
        service = FakeSheetsService(error=TimeoutError("timed out"))
        with pytest.raises(UpstreamFetchError):
            SheetsWordListSource("key", service=service).fetch("sheet-1", ["A", "B"])
