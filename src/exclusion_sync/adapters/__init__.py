"""Concrete adapter implementations."""

from .direct_api import DirectApiClient, DirectCampaigns, DirectReports
from .google_sheets import SheetsWordListSource
from .report_parser import parse_placement_report

__all__ = [
    "DirectApiClient",
    "DirectCampaigns",
    "DirectReports",
    "SheetsWordListSource",
    "parse_placement_report",
]
