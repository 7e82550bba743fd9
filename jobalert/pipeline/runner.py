"""Pipeline orchestration: harvest, dedup, filter, exclude, dispatch, persist."""

import threading
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from jobalert.adapters.base import BaseAdapter
from jobalert.aggregation import aggregate, harvest
from jobalert.config.models import AppConfig
from jobalert.domain.models import Posting
from jobalert.filtering import filter_postings
from jobalert.ledger import NotificationLedger
from jobalert.logging import get_logger
from jobalert.logging.context import log_context
from jobalert.notifications.dispatcher import Dispatcher
from jobalert.utils.timestamps import utc_now

from .models import PipelineRunResult, PipelineStage

logger = get_logger(__name__, component="pipeline")


class JobAlertPipeline:
    """
    Runs the job alert stages once per invocation.

    INIT -> HARVEST -> DEDUP -> FILTER -> EXCLUDE_NOTIFIED, then either DONE
    (no new postings) or DISPATCH -> PERSIST_LEDGER -> DONE. The ledger is
    persisted after dispatch whatever the channel outcomes were, so a
    posting is offered to the channels at most once.

    Ledger errors propagate to the caller; adapter and channel failures are
    absorbed by the adapters and the dispatcher.
    """

    def __init__(
        self,
        app_config: AppConfig,
        adapters: Sequence[BaseAdapter],
        ledger: NotificationLedger,
        dispatcher: Dispatcher,
        harvester: Callable[..., List[List[Posting]]] = harvest,
    ):
        """
        Args:
            app_config: Application configuration (criteria and advanced settings)
            adapters: Enabled source adapters in declaration order
            ledger: Notification ledger
            dispatcher: Dispatcher wrapping the notification channels
            harvester: Replacement for aggregation.harvest (for testing)
        """
        self.app_config = app_config
        self.criteria = app_config.criteria
        self.adapters = list(adapters)
        self.ledger = ledger
        self.dispatcher = dispatcher
        self._harvest = harvester
        self._lock = threading.Lock()

    def run_once(self, dry_run: bool = False) -> PipelineRunResult:
        """
        Execute one complete run.

        Args:
            dry_run: Stop after EXCLUDE_NOTIFIED and log what would be sent

        Returns:
            PipelineRunResult with stage counts and channel outcomes

        Raises:
            LedgerError: If the ledger cannot be read or persisted
        """
        result = PipelineRunResult(run_id=uuid4().hex, run_started_at=utc_now(), dry_run=dry_run)

        if not self._lock.acquire(blocking=False):
            with log_context(run_id=result.run_id):
                logger.warning(
                    "Pipeline run skipped: previous run still in progress",
                    extra={"event": "pipeline.run.skipped", "reason": "lock_held"},
                )
            result.skipped = True
            result.finish(utc_now())
            return result

        try:
            with log_context(run_id=result.run_id):
                self._run(result, dry_run)
                return result
        finally:
            self._lock.release()

    def _run(self, result: PipelineRunResult, dry_run: bool) -> None:
        result.enter(PipelineStage.INIT)
        logger.info(
            "Pipeline run started",
            extra={
                "event": "pipeline.run.started",
                "source_count": len(self.adapters),
                "keywords": list(self.criteria.keywords),
                "dry_run": dry_run,
            },
        )
        # A broken ledger aborts the run before any source is contacted
        notified = self.ledger.load()

        result.enter(PipelineStage.HARVEST)
        batches = self._harvest(
            self.adapters,
            self.criteria,
            timeout=self.app_config.advanced.source_timeout,
            max_workers=self.app_config.advanced.max_workers,
        )
        result.per_source = {a.name: len(b) for a, b in zip(self.adapters, batches)}
        result.harvested = sum(len(batch) for batch in batches)

        result.enter(PipelineStage.DEDUP)
        unique = aggregate(batches)
        result.unique = len(unique)

        result.enter(PipelineStage.FILTER)
        matched = filter_postings(unique, self.criteria)
        result.matched = len(matched)

        result.enter(PipelineStage.EXCLUDE_NOTIFIED)
        new_postings = [p for p in matched if p.identity not in notified]
        result.new = len(new_postings)

        logger.info(
            f"Stage counts: {result.harvested} harvested, {result.unique} unique, "
            f"{result.matched} matched, {result.new} new",
            extra={"event": "pipeline.stages.counted", **result.counts()},
        )

        if not new_postings:
            logger.info("No new postings to send", extra={"event": "pipeline.run.nothing_new"})
        elif dry_run:
            for posting in new_postings:
                logger.info(
                    f"Would notify: {posting.title} - {posting.company}",
                    extra={"event": "pipeline.dry_run.posting", "identity": posting.identity},
                )
        else:
            result.enter(PipelineStage.DISPATCH)
            result.dispatch_report = self.dispatcher.dispatch(new_postings)

            result.enter(PipelineStage.PERSIST_LEDGER)
            self.ledger.append(p.identity for p in new_postings)
            result.notified = len(new_postings)

        result.enter(PipelineStage.DONE)
        result.finish(utc_now())
        logger.info(
            "Pipeline run completed",
            extra={
                "event": "pipeline.run.completed",
                "duration_ms": int(result.total_duration_seconds * 1000),
                "outcomes": result.dispatch_report.summary() if result.dispatch_report else {},
                **result.counts(),
            },
        )
