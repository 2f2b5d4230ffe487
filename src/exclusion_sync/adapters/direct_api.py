"""Adapter: Yandex Direct API v5 (JSON-RPC over HTTPS) via requests.

Implements CampaignLister, CampaignUpdater and ReportSource. Every request
builds its own header set; sessions only pool connections and never carry
auth state. Each thread gets its own ``requests.Session``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

import requests
from pydantic import ValidationError

from ..errors import PartialUpdateError, UpstreamFetchError, UpstreamUpdateError
from ..models.campaign import CampaignSnapshot
from ..ports.id_gen import ReportNameProvider, UuidReportNameProvider
from .report_parser import parse_placement_report

_LOGGER = logging.getLogger("exclusion_sync.direct")

DEFAULT_API_URL = "https://api.direct.yandex.com/json/v5/"

# 201/202 mean the report was queued for offline generation.
_REPORT_PENDING_CODES = (201, 202)


def _body_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:1000]


def _describe_error(error: dict[str, Any]) -> str:
    parts = [str(error.get("error_string") or "error")]
    if error.get("error_detail"):
        parts.append(str(error["error_detail"]))
    if error.get("error_code") is not None:
        parts.append(f"code {error['error_code']}")
    return ", ".join(parts)


class DirectApiClient:
    """Thin, stateless JSON-RPC client for the Direct API.

    An injected *session* is used as-is by every caller; otherwise each
    thread lazily opens its own, since ``requests.Session`` is not
    documented as thread-safe.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        *,
        client_login: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._token = token
        self._api_url = api_url if api_url.endswith("/") else api_url + "/"
        self._client_login = client_login
        self._timeout = timeout
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The session for the calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def build_headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        """Return a fresh header dict for one request."""
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept-Language": "en",
            "Content-Type": "application/json; charset=utf-8",
        }
        if self._client_login:
            headers["Client-Login"] = self._client_login
        if extra:
            headers.update(extra)
        return headers

    def _post(
        self,
        service: str,
        body: dict[str, Any],
        headers: dict[str, str],
        error_cls: type[UpstreamFetchError] | type[UpstreamUpdateError],
    ) -> requests.Response:
        try:
            return self.session.post(
                self._api_url + service,
                json=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise error_cls(f"{service}: transport error: {exc}") from exc

    def call(
        self,
        service: str,
        method: str,
        params: dict[str, Any],
        *,
        error_cls: type[UpstreamFetchError] | type[UpstreamUpdateError] = UpstreamFetchError,
    ) -> dict[str, Any]:
        """POST a JSON-RPC request and return the decoded envelope.

        Transport failures, non-200 statuses and undecodable bodies raise
        *error_cls*. The envelope's ``error`` member is left for the caller.
        """
        action = f"{service}.{method}"
        response = self._post(service, {"method": method, "params": params}, self.build_headers(), error_cls)
        if response.status_code != 200:
            raise error_cls(f"{action}: HTTP {response.status_code}", payload=_body_payload(response))
        try:
            envelope = response.json()
        except ValueError as exc:
            raise error_cls(f"{action}: response is not JSON", payload=response.text[:1000]) from exc
        if not isinstance(envelope, dict):
            raise error_cls(f"{action}: unexpected response shape", payload=envelope)
        return envelope

    def report(self, definition: dict[str, Any], *, processing_mode: str = "auto") -> str:
        """Request a report and return its TSV body (column header first)."""
        headers = self.build_headers(
            {
                "processingMode": processing_mode,
                "skipReportHeader": "true",
                "returnMoneyInMicros": "false",
            }
        )
        response = self._post("reports", {"params": definition}, headers, UpstreamFetchError)
        if response.status_code in _REPORT_PENDING_CODES:
            raise UpstreamFetchError(
                f"reports: report {definition.get('ReportName')!r} is still being generated",
                payload={"status": response.status_code, "retry_in": response.headers.get("retryIn")},
            )
        if response.status_code != 200:
            raise UpstreamFetchError(f"reports: HTTP {response.status_code}", payload=_body_payload(response))
        # Reports are UTF-8 even when Content-Type carries no charset.
        return response.content.decode("utf-8")


class DirectCampaigns:
    """CampaignLister and CampaignUpdater backed by the campaigns service."""

    def __init__(self, client: DirectApiClient, *, strict_reads: bool = False) -> None:
        self._client = client
        self._strict_reads = strict_reads

    def list_campaigns(self, campaign_ids: Sequence[int] | None = None) -> list[CampaignSnapshot]:
        if campaign_ids:
            criteria: dict[str, Any] = {"Ids": [int(i) for i in campaign_ids]}
        else:
            criteria = {"States": ["ON"]}
        envelope = self._client.call(
            "campaigns",
            "get",
            {"SelectionCriteria": criteria, "FieldNames": ["Id", "Name", "ExcludedSites"]},
        )
        error = envelope.get("error")
        if error is not None:
            if self._strict_reads:
                raise UpstreamFetchError(f"campaigns.get: {_describe_error(error)}", payload=error)
            _LOGGER.warning("campaigns_get_unchecked_error", extra={"error": error})

        campaigns = (envelope.get("result") or {}).get("Campaigns") or []
        return [_snapshot(item) for item in campaigns]

    def update_excluded_sites(self, campaign_id: int, sites: Sequence[str]) -> None:
        excluded = {"Items": list(sites)} if sites else None
        envelope = self._client.call(
            "campaigns",
            "update",
            {"Campaigns": [{"Id": campaign_id, "ExcludedSites": excluded}]},
            error_cls=UpstreamUpdateError,
        )
        check_update_envelope(envelope, campaign_id)


def check_update_envelope(envelope: dict[str, Any], campaign_id: int) -> None:
    """Raise on an error envelope or on per-campaign errors in UpdateResults."""
    error = envelope.get("error")
    if error is not None:
        raise UpstreamUpdateError(f"campaigns.update: {_describe_error(error)}", payload=error)

    results = (envelope.get("result") or {}).get("UpdateResults") or []
    for item in results:
        item_id = item.get("Id") or campaign_id
        warnings = item.get("Warnings") or []
        if warnings:
            _LOGGER.warning("campaign_update_warnings", extra={"campaign_id": item_id, "warnings": warnings})
        errors = item.get("Errors") or []
        if errors:
            raise PartialUpdateError(item_id, errors)


class DirectReports:
    """ReportSource built on a CUSTOM_REPORT of placements."""

    def __init__(
        self,
        client: DirectApiClient,
        *,
        date_range: str = "AUTO",
        processing_mode: str = "auto",
        name_provider: ReportNameProvider | None = None,
    ) -> None:
        self._client = client
        self._date_range = date_range
        self._processing_mode = processing_mode
        self._names = name_provider or UuidReportNameProvider()

    def build_definition(self, campaign_id: int) -> dict[str, Any]:
        return {
            "SelectionCriteria": {
                "Filter": [
                    {"Field": "CampaignId", "Operator": "EQUALS", "Values": [str(campaign_id)]},
                ]
            },
            "FieldNames": ["Placement", "Impressions"],
            "ReportName": self._names.new_report_name(campaign_id),
            "ReportType": "CUSTOM_REPORT",
            "DateRangeType": self._date_range,
            "Format": "TSV",
            "IncludeVAT": "NO",
            "IncludeDiscount": "NO",
        }

    def placement_sites(self, campaign_id: int) -> list[str]:
        text = self._client.report(self.build_definition(campaign_id), processing_mode=self._processing_mode)
        return parse_placement_report(text)


def _snapshot(item: Any) -> CampaignSnapshot:
    try:
        return CampaignSnapshot(
            campaign_id=item["Id"],
            name=item.get("Name"),
            excluded_sites=(item.get("ExcludedSites") or {}).get("Items") or [],
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as exc:
        raise UpstreamFetchError("campaigns.get: unexpected campaign shape", payload=item) from exc
