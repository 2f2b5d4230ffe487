"""ReconciliationService: one pass of exclusion-list reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ..domain.classifier import SiteClassifier
from ..domain.merger import ExclusionMerger
from ..domain.normalizer import normalize_domain
from ..errors import ExclusionSyncError, UpstreamFetchError
from ..models.campaign import CampaignSnapshot, WordLists
from ..models.outcome import CampaignOutcome, OutcomeError, OutcomeStatus, RunSummary
from ..observability import record_outcome
from ..ports.campaigns import CampaignLister, CampaignUpdater
from ..ports.reports import ReportSource
from ..ports.word_lists import WordListSource

_LOGGER = logging.getLogger("exclusion_sync.reconciliation")


class ReconciliationService:
    """Orchestrates classify → merge → update for every listed campaign.

    Word lists and the campaign listing are shared by the whole run, so a
    failure there aborts it. Anything that goes wrong inside one campaign is
    turned into a failed ``CampaignOutcome`` and the run moves on.
    """

    def __init__(
        self,
        word_list_source: WordListSource,
        campaign_lister: CampaignLister,
        report_source: ReportSource,
        campaign_updater: CampaignUpdater,
        *,
        spreadsheet_id: str,
        blacklist_range: str,
        whitelist_range: str,
        classifier: SiteClassifier | None = None,
        merger: ExclusionMerger | None = None,
        max_workers: int = 1,
    ) -> None:
        self._word_lists = word_list_source
        self._campaigns = campaign_lister
        self._reports = report_source
        self._updater = campaign_updater
        self._spreadsheet_id = spreadsheet_id
        self._ranges = (blacklist_range, whitelist_range)
        self._classifier = classifier or SiteClassifier()
        self._merger = merger or ExclusionMerger()
        self._max_workers = max(1, max_workers)

    def load_word_lists(self) -> WordLists:
        lists = self._word_lists.fetch(self._spreadsheet_id, list(self._ranges))
        if len(lists) != 2:
            raise UpstreamFetchError(f"expected 2 word lists, got {len(lists)}")
        word_lists = WordLists(blacklist=lists[0], whitelist=lists[1])
        _LOGGER.info(
            "word_lists_loaded",
            extra={"blacklist": len(word_lists.blacklist), "whitelist": len(word_lists.whitelist)},
        )
        return word_lists

    def run(
        self,
        campaign_ids: Sequence[int] | None = None,
        *,
        dry_run: bool = False,
    ) -> RunSummary:
        """Reconcile every active (or every requested) campaign.

        Raises:
            UpstreamFetchError: If the word lists or the campaign listing cannot be read
        """
        _LOGGER.info("run_start", extra={"campaign_ids": list(campaign_ids or []), "dry_run": dry_run})
        word_lists = self.load_word_lists()
        snapshots = self._campaigns.list_campaigns(campaign_ids)
        _LOGGER.info("campaigns_listed", extra={"count": len(snapshots)})

        if self._max_workers > 1 and len(snapshots) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                outcomes = list(
                    pool.map(lambda s: self.reconcile_campaign(s, word_lists, dry_run=dry_run), snapshots)
                )
        else:
            outcomes = [self.reconcile_campaign(s, word_lists, dry_run=dry_run) for s in snapshots]

        for outcome in outcomes:
            record_outcome(outcome)

        summary = RunSummary(outcomes=outcomes, dry_run=dry_run)
        _LOGGER.info(
            "run_complete",
            extra={
                "blocked": summary.blocked,
                "updated": summary.updated,
                "skipped": summary.skipped,
                "failed": summary.failed,
            },
        )
        return summary

    def reconcile_campaign(
        self,
        snapshot: CampaignSnapshot,
        word_lists: WordLists,
        *,
        dry_run: bool = False,
    ) -> CampaignOutcome:
        """Reconcile one campaign; never raises."""
        campaign_id = snapshot.campaign_id
        outcome = CampaignOutcome(campaign_id=campaign_id, status=OutcomeStatus.failed)
        try:
            sites = self._reports.placement_sites(campaign_id)
            outcome.report_sites = len(sites)

            blocked = self._classifier.classify(sites, word_lists.blacklist, word_lists.whitelist)
            # Placements like "www." normalize to nothing and cannot be excluded.
            blocked = {site for site in blocked if normalize_domain(site)}
            # Sorted so the cap tie-break does not depend on set iteration order.
            outcome.blocked = sorted(blocked)
            _LOGGER.debug(
                "campaign_classified",
                extra={"campaign_id": campaign_id, "report_sites": len(sites), "blocked": len(blocked)},
            )

            result = self._merger.merge(snapshot.excluded_sites, outcome.blocked)
            outcome.added = result.added
            outcome.dropped = result.dropped
            outcome.final_size = len(result.final_sites)

            if not result.changed:
                outcome.status = OutcomeStatus.skipped
            elif dry_run:
                outcome.status = OutcomeStatus.dry_run
            else:
                self._updater.update_excluded_sites(campaign_id, result.final_sites)
                outcome.status = OutcomeStatus.updated
        except ExclusionSyncError as exc:
            outcome.status = OutcomeStatus.failed
            outcome.error = OutcomeError(**exc.to_dict())
        except Exception as exc:
            _LOGGER.exception("campaign_unexpected_error", extra={"campaign_id": campaign_id})
            outcome.status = OutcomeStatus.failed
            outcome.error = OutcomeError(kind="unexpected", message=f"{type(exc).__name__}: {exc}")
        return outcome
