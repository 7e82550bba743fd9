"""Result types and exceptions for notification channels.

Every channel invocation in a run produces one ChannelOutcome; the
Dispatcher collects them into a DispatchReport for the pipeline result.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when template rendering fails due to configuration or missing variables."""

    pass


class ChannelDeliveryError(NotificationError):
    """Raised when a channel cannot deliver its message.

    For email this is raised only after all retry attempts are exhausted.
    """

    def __init__(self, message: str, channel: Optional[str] = None):
        super().__init__(message)
        self.channel = channel


@dataclass
class ChannelOutcome:
    """Outcome of one channel for one run.

    Attributes:
        channel: Channel name (email, telegram, whatsapp)
        status: One of sent, skipped, failed
        delivered: Number of postings included in the delivered message
        error: Error message when status is failed
        detail: Why a channel was skipped
    """

    channel: str
    status: str
    delivered: int = 0
    error: Optional[str] = None
    detail: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == SENT


@dataclass
class DispatchReport:
    """Per-channel outcomes of one dispatch, in channel order."""

    outcomes: List[ChannelOutcome] = field(default_factory=list)

    def add(self, outcome: ChannelOutcome) -> None:
        self.outcomes.append(outcome)

    def by_status(self, status: str) -> List[ChannelOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def sent(self) -> List[str]:
        return [outcome.channel for outcome in self.by_status(SENT)]

    @property
    def skipped(self) -> List[str]:
        return [outcome.channel for outcome in self.by_status(SKIPPED)]

    @property
    def failed(self) -> List[str]:
        return [outcome.channel for outcome in self.by_status(FAILED)]

    def get(self, channel: str) -> Optional[ChannelOutcome]:
        for outcome in self.outcomes:
            if outcome.channel == channel:
                return outcome
        return None

    def summary(self) -> Dict[str, str]:
        """Channel name to status, for log extras."""
        return {outcome.channel: outcome.status for outcome in self.outcomes}
