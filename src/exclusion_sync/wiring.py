"""Composition root: the single place where all wiring happens.

Call ``build_reconciliation_service()`` to get a fully-constructed service
with real adapters. No ad-hoc construction elsewhere.
"""

from __future__ import annotations

from .adapters.direct_api import DirectApiClient, DirectCampaigns, DirectReports
from .adapters.google_sheets import SheetsWordListSource
from .config.runtime import WorkerSettings, get_settings
from .domain.merger import ExclusionMerger
from .services.reconciliation import ReconciliationService


def build_direct_client(settings: WorkerSettings) -> DirectApiClient:
    return DirectApiClient(
        settings.yandex_token.get_secret_value(),
        settings.direct_api_url,
        client_login=settings.direct_client_login,
        timeout=settings.request_timeout_seconds,
    )


def build_reconciliation_service(settings: WorkerSettings | None = None) -> ReconciliationService:
    """Construct a ReconciliationService with real adapters."""
    settings = settings or get_settings()
    client = build_direct_client(settings)
    campaigns = DirectCampaigns(client, strict_reads=settings.strict_campaign_reads)
    return ReconciliationService(
        word_list_source=SheetsWordListSource(
            settings.google_api_key.get_secret_value(),
            application_name=settings.application_name,
        ),
        campaign_lister=campaigns,
        report_source=DirectReports(
            client,
            date_range=settings.report_date_range,
            processing_mode=settings.report_processing_mode,
        ),
        campaign_updater=campaigns,
        spreadsheet_id=settings.sheet_id,
        blacklist_range=settings.sheet_range_blacklist,
        whitelist_range=settings.sheet_range_whitelist,
        merger=ExclusionMerger(
            max_sites=settings.max_excluded_sites,
            cap_policy=settings.cap_policy,
        ),
        max_workers=settings.max_workers,
    )
