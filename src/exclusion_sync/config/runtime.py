"""Pydantic-based runtime settings for the reconciliation worker.

Loads from environment variables (with optional .env file).
Missing or blank required values surface as ``ConfigurationError`` from
``load_settings()`` before any network call is made.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..domain.merger import PLATFORM_MAX_EXCLUDED_SITES, CapPolicy
from ..errors import ConfigurationError

_REQUIRED_FIELDS = ("yandex_token", "sheet_id", "google_api_key")


class WorkerSettings(BaseSettings):
    """All configuration for one reconciliation run, validated at startup."""

    model_config = {
        "env_prefix": "",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    # --- Credentials ---
    yandex_token: SecretStr = Field(..., description="OAuth token for the Yandex Direct API")
    google_api_key: SecretStr = Field(..., description="API key for the Google Sheets API")

    # --- Word lists ---
    sheet_id: str = Field(..., description="Spreadsheet holding the blacklist/whitelist columns")
    sheet_range_blacklist: str = Field(default="Лист1!A2:A", description="A1 range of blacklist substrings")
    sheet_range_whitelist: str = Field(default="Лист1!B2:B", description="A1 range of whitelisted placements")

    # --- Campaign selection ---
    campaign_ids: str = Field(
        default="",
        validation_alias=AliasChoices("CAMPAIGN_IDS", "CAMPAIGN_ID", "campaign_ids"),
        description="Comma-separated campaign IDs; empty means every active campaign",
    )

    # --- Direct API ---
    direct_api_url: str = Field(
        default="https://api.direct.yandex.com/json/v5/",
        description="Base URL of the Direct JSON API",
    )
    direct_client_login: str | None = Field(
        default=None,
        description="Client-Login header for agency accounts",
    )
    report_date_range: str = Field(default="AUTO", description="DateRangeType of the placement report")
    report_processing_mode: str = Field(
        default="auto",
        description="processingMode header for reports: auto, online or offline",
    )
    strict_campaign_reads: bool = Field(
        default=False,
        description="If True, an error envelope on campaigns.get fails the read instead of being logged",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    # --- Merge policy ---
    max_excluded_sites: int = Field(
        default=PLATFORM_MAX_EXCLUDED_SITES,
        ge=1,
        le=PLATFORM_MAX_EXCLUDED_SITES,
        description="Cap on the merged exclusion list",
    )
    cap_policy: CapPolicy = Field(
        default=CapPolicy.existing_first,
        description="Which entries survive truncation when the cap is hit",
    )

    # --- Run behaviour ---
    max_workers: int = Field(default=1, ge=1, le=8, description="Campaigns processed in parallel")
    dry_run: bool = Field(default=False, description="Compute updates without sending them")
    log_level: str = Field(default="INFO", description="Root log level")
    application_name: str = Field(default="exclusion-sync", description="Sheets client application name")

    @field_validator(*_REQUIRED_FIELDS, mode="before")
    @classmethod
    def _not_blank(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("campaign_ids", mode="before")
    @classmethod
    def _ids_are_integers(cls, v: Any) -> str:
        if isinstance(v, int):
            v = str(v)
        if isinstance(v, (list, tuple)):
            v = ",".join(str(i) for i in v)
        for part in str(v).split(","):
            part = part.strip()
            if part and not part.isdigit():
                raise ValueError(f"campaign id must be a positive integer, got {part!r}")
        return str(v)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def campaign_id_list(self) -> list[int]:
        ids = [int(p) for p in self.campaign_ids.split(",") if p.strip()]
        # CAMPAIGN_ID=0 was the historical "unset" marker
        return [i for i in ids if i > 0]

    def masked(self) -> dict[str, Any]:
        """Settings as a dict with secrets masked, for diagnostics output."""
        data = self.model_dump(mode="json")
        for name in ("yandex_token", "google_api_key"):
            data[name] = "**********"
        return data


def load_settings(**overrides: Any) -> WorkerSettings:
    """Build WorkerSettings, translating validation failures to ConfigurationError."""
    try:
        return WorkerSettings(**overrides)
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ())) or "settings"
            problems.append(f"{field.upper()}: {err.get('msg')}")
        raise ConfigurationError(
            "invalid configuration: " + "; ".join(problems),
            payload=problems,
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> WorkerSettings:
    """Return the singleton WorkerSettings (cached after first call)."""
    return load_settings()
