"""Domain layer: pure reconciliation logic, no I/O."""

from .classifier import SiteClassifier
from .merger import PLATFORM_MAX_EXCLUDED_SITES, CapPolicy, ExclusionMerger, MergeResult
from .normalizer import normalize_domain

__all__ = [
    "CapPolicy",
    "ExclusionMerger",
    "MergeResult",
    "PLATFORM_MAX_EXCLUDED_SITES",
    "SiteClassifier",
    "normalize_domain",
]
