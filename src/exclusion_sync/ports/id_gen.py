"""Port: report name generation."""

from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class ReportNameProvider(Protocol):
    """Generate a report name; Direct caches reports by name, so it must be unique."""

    def new_report_name(self, campaign_id: int) -> str: ...


class UuidReportNameProvider:
    """Uses a uuid4 suffix so no two requests share a cached report."""

    def __init__(self, prefix: str = "ExclusionSync") -> None:
        self._prefix = prefix

    def new_report_name(self, campaign_id: int) -> str:
        return f"{self._prefix}_{campaign_id}_{uuid.uuid4().hex}"
