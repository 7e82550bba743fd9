"""Persistent ledger of posting identities that were already notified."""

from .exceptions import LedgerError, LedgerReadError, LedgerWriteError
from .store import NotificationLedger

__all__ = ["NotificationLedger", "LedgerError", "LedgerReadError", "LedgerWriteError"]
