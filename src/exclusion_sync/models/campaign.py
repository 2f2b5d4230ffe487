"""Inputs to a reconciliation run."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CampaignSnapshot(BaseModel):
    """A campaign as listed by the ad platform at the start of a run."""

    campaign_id: int = Field(..., gt=0, description="Direct campaign identifier")
    name: str | None = Field(default=None, description="Campaign display name")
    excluded_sites: list[str] = Field(
        default_factory=list,
        description="Current ExcludedSites items, as stored on the platform",
    )


class WordLists(BaseModel):
    """Blacklist substrings and whitelisted placements from the spreadsheet."""

    blacklist: list[str] = Field(default_factory=list, description="Substrings that flag a placement")
    whitelist: list[str] = Field(default_factory=list, description="Placements never excluded")
