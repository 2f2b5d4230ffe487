"""Port: placement performance reports."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReportSource(Protocol):
    """Return the distinct placements a campaign was shown on.

    Blank rows, totals and placeholder rows are already removed.
    """

    def placement_sites(self, campaign_id: int) -> list[str]: ...
