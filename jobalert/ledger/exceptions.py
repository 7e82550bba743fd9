"""Ledger exceptions.

Ledger failures are fatal for a run: continuing with an assumed-empty
ledger would resend every posting.
"""


class LedgerError(Exception):
    """Base exception for notification ledger failures."""

    pass


class LedgerReadError(LedgerError):
    """Raised when an existing ledger cannot be read or is malformed."""

    pass


class LedgerWriteError(LedgerError):
    """Raised when the merged ledger cannot be persisted."""

    pass
