"""Base class for notification channels."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from jobalert.domain.models import Posting


class NotificationChannel(ABC):
    """A destination for the per-run posting digest.

    ``send`` receives every new posting of the run; truncation to a channel
    limit happens inside the channel. It returns the number of postings the
    delivered message contains and raises on failure.
    """

    name = ""

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials and settings allow this channel to send."""

    def skip_reason(self) -> Optional[str]:
        """Human-readable reason the channel is unconfigured, for logs."""
        return None

    @abstractmethod
    def send(self, postings: Sequence[Posting]) -> int:
        """Deliver one message for the postings.

        Raises:
            NotificationError: If the message could not be delivered
        """
