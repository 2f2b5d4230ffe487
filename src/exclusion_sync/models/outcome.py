"""Per-campaign outcomes and the run summary."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field


class OutcomeStatus(str, Enum):
    updated = "updated"
    skipped = "skipped"
    failed = "failed"
    dry_run = "dry_run"


class OutcomeError(BaseModel):
    """Error detail attached to a failed campaign."""

    kind: str = Field(..., description="Error kind, e.g. 'upstream_fetch' or 'partial_update'")
    message: str = Field(..., description="Human-readable error message")
    payload: Any = Field(default=None, description="Structured platform error payload, if any")


class CampaignOutcome(BaseModel):
    """What happened to one campaign during a run."""

    campaign_id: int
    status: OutcomeStatus
    report_sites: int = Field(default=0, description="Distinct placements in the report")
    blocked: list[str] = Field(default_factory=list, description="Report placements matched by the blacklist")
    added: list[str] = Field(default_factory=list, description="Normalized domains new to the exclusion list")
    dropped: list[str] = Field(default_factory=list, description="Domains cut by the size cap")
    final_size: int = Field(default=0, description="Size of the merged exclusion list")
    error: OutcomeError | None = None


class RunSummary(BaseModel):
    """Aggregate result of a run; always produced, even when campaigns fail."""

    outcomes: list[CampaignOutcome] = Field(default_factory=list)
    dry_run: bool = False

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @computed_field
    @property
    def blocked(self) -> int:
        return sum(len(o.blocked) for o in self.outcomes)

    @computed_field
    @property
    def updated(self) -> int:
        return self._count(OutcomeStatus.updated)

    @computed_field
    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.skipped)

    @computed_field
    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.failed)

    @computed_field
    @property
    def message(self) -> str:
        verb = "would update" if self.dry_run else "updated"
        pending = self._count(OutcomeStatus.dry_run) if self.dry_run else self.updated
        text = (
            f"Blocked {self.blocked} site(s); {verb} {pending}, "
            f"skipped {self.skipped}, failed {self.failed} campaign(s)."
        )
        if self.failed:
            return "Completed with errors. " + text
        return "Success. " + text
