"""Port interfaces (Protocols).

The reconciliation service depends only on these, never on concrete
adapters. No requests or googleapiclient imports allowed here.
"""

from .campaigns import CampaignLister, CampaignUpdater
from .id_gen import ReportNameProvider, UuidReportNameProvider
from .reports import ReportSource
from .word_lists import WordListSource

__all__ = [
    "CampaignLister",
    "CampaignUpdater",
    "ReportNameProvider",
    "ReportSource",
    "UuidReportNameProvider",
    "WordListSource",
]
