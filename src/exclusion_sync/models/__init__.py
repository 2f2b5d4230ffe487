"""Run input and output models."""

from .campaign import CampaignSnapshot, WordLists
from .outcome import CampaignOutcome, OutcomeError, OutcomeStatus, RunSummary

__all__ = [
    # Inputs
    "CampaignSnapshot",
    "WordLists",
    # Outputs
    "CampaignOutcome",
    "OutcomeError",
    "OutcomeStatus",
    "RunSummary",
]
