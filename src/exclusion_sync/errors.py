"""Error taxonomy for the reconciliation worker.

Classification and merging are total functions and never raise; everything
here originates at an I/O boundary (environment, Sheets, Direct API).
"""

from __future__ import annotations

from typing import Any


class ExclusionSyncError(Exception):
    """Base class for all worker errors."""

    kind = "error"

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.payload is not None:
            data["payload"] = self.payload
        return data


class ConfigurationError(ExclusionSyncError):
    """A required setting is absent or empty. Fatal, raised before any network call."""

    kind = "configuration"


class UpstreamFetchError(ExclusionSyncError):
    """Spreadsheet, campaign or report retrieval failed."""

    kind = "upstream_fetch"


class UpstreamUpdateError(ExclusionSyncError):
    """Campaign update failed at transport level or returned an error envelope."""

    kind = "upstream_update"


class PartialUpdateError(UpstreamUpdateError):
    """Update accepted by transport, but the platform reported field-level errors."""

    kind = "partial_update"

    def __init__(self, campaign_id: int, errors: list[dict[str, Any]]) -> None:
        super().__init__(
            f"campaign {campaign_id}: platform rejected update ({len(errors)} error(s))",
            payload=errors,
        )
        self.campaign_id = campaign_id
        self.errors = errors
