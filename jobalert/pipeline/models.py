"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from jobalert.notifications.models import DispatchReport


class PipelineStage(str, Enum):
    """Stages of one run, in execution order."""

    INIT = "init"
    HARVEST = "harvest"
    DEDUP = "dedup"
    FILTER = "filter"
    EXCLUDE_NOTIFIED = "exclude_notified"
    DISPATCH = "dispatch"
    PERSIST_LEDGER = "persist_ledger"
    DONE = "done"


@dataclass
class PipelineRunResult:
    """
    Stage counts and outcomes of one pipeline run.

    Attributes:
        run_id: Identifier shared by every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Total time for the entire run
        per_source: Postings harvested per source name, in declaration order
        harvested: Postings returned by all adapters
        unique: Postings left after identity deduplication
        matched: Postings passing the filter
        new: Matched postings not yet in the ledger
        notified: Identities appended to the ledger
        dispatch_report: Channel outcomes, None when nothing was dispatched
        stages: Stages entered, in order
        dry_run: Whether dispatch and ledger persist were skipped on purpose
        skipped: Whether the run was skipped (lock already held)
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: Optional[datetime] = None
    total_duration_seconds: float = 0.0
    per_source: Dict[str, int] = field(default_factory=dict)
    harvested: int = 0
    unique: int = 0
    matched: int = 0
    new: int = 0
    notified: int = 0
    dispatch_report: Optional[DispatchReport] = None
    stages: List[PipelineStage] = field(default_factory=list)
    dry_run: bool = False
    skipped: bool = False

    @property
    def final_stage(self) -> Optional[PipelineStage]:
        return self.stages[-1] if self.stages else None

    def enter(self, stage: PipelineStage) -> None:
        self.stages.append(stage)

    def finish(self, finished_at: datetime) -> None:
        self.run_finished_at = finished_at
        self.total_duration_seconds = (finished_at - self.run_started_at).total_seconds()

    def counts(self) -> Dict[str, int]:
        """Stage counts for log extras."""
        return {
            "harvested": self.harvested,
            "unique": self.unique,
            "matched": self.matched,
            "new": self.new,
            "notified": self.notified,
        }
