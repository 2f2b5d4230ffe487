"""Port: campaign state on the ad platform."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models.campaign import CampaignSnapshot


@runtime_checkable
class CampaignLister(Protocol):
    """List active campaigns with a snapshot of their exclusion lists."""

    def list_campaigns(self, campaign_ids: Sequence[int] | None = None) -> list[CampaignSnapshot]: ...


@runtime_checkable
class CampaignUpdater(Protocol):
    """Replace a campaign's exclusion list.

    Raises ``UpstreamUpdateError`` on transport or envelope errors and
    ``PartialUpdateError`` when the platform rejects specific fields.
    """

    def update_excluded_sites(self, campaign_id: int, sites: Sequence[str]) -> None: ...
