"""Placement exclusion reconciliation worker."""

from .domain import CapPolicy, ExclusionMerger, MergeResult, SiteClassifier, normalize_domain
from .errors import (
    ConfigurationError,
    ExclusionSyncError,
    PartialUpdateError,
    UpstreamFetchError,
    UpstreamUpdateError,
)

__version__ = "0.1.0"
__all__ = [
    "CapPolicy",
    "ConfigurationError",
    "ExclusionMerger",
    "ExclusionSyncError",
    "MergeResult",
    "PartialUpdateError",
    "SiteClassifier",
    "UpstreamFetchError",
    "UpstreamUpdateError",
    "normalize_domain",
]
