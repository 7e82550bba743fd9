"""JSON file store for the notification ledger.

The ledger is a JSON array of posting identities that have already been
notified. It only grows: identities are merged in after each dispatch and
never removed. Writes go to a temporary file in the same directory which
then replaces the ledger, so a crash mid-write leaves the previous ledger
intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Set, Union

from jobalert.logging import get_logger

from .exceptions import LedgerReadError, LedgerWriteError

logger = get_logger(__name__, component="ledger")


class NotificationLedger:
    """Durable set of identities already notified."""

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Ledger file location; parent directories are created on
                first append
        """
        self.path = Path(path)
        self._identities: Optional[Set[str]] = None

    def load(self) -> Set[str]:
        """Read stored identities.

        Returns:
            Stored identities, or an empty set if no ledger exists yet

        Raises:
            LedgerReadError: If the file exists but cannot be read or does
                not hold a JSON array of strings
        """
        if not self.path.exists():
            logger.info(
                f"No ledger at {self.path}; starting empty",
                extra={"event": "ledger.missing", "path": str(self.path)},
            )
            self._identities = set()
            return set()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise LedgerReadError(f"Ledger {self.path} is not valid UTF-8 JSON: {e}") from e
        except OSError as e:
            raise LedgerReadError(f"Failed to read ledger {self.path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise LedgerReadError(
                f"Ledger {self.path} must contain a JSON array of strings"
            )

        self._identities = set(data)
        logger.debug(
            f"Loaded {len(self._identities)} identities from ledger",
            extra={"event": "ledger.loaded", "count": len(self._identities)},
        )
        return set(self._identities)

    def contains(self, identity: str) -> bool:
        """Membership check against the loaded ledger (loads on first use)."""
        if self._identities is None:
            self.load()
        return identity in self._identities

    def append(self, identities: Iterable[str]) -> None:
        """Merge identities into the ledger and persist atomically.

        The stored file is re-read before merging so identities written by
        an earlier append are never dropped.

        Raises:
            LedgerReadError: If the existing ledger cannot be read
            LedgerWriteError: If the merged ledger cannot be written
        """
        new_ids = set(identities)
        merged = self.load() | new_ids
        self._write_atomic(sorted(merged))
        self._identities = merged

        logger.info(
            f"Ledger persisted with {len(merged)} identities",
            extra={
                "event": "ledger.persisted",
                "path": str(self.path),
                "added": len(new_ids),
                "total": len(merged),
            },
        )

    def _write_atomic(self, identities: list) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(identities, tmp, indent=2, ensure_ascii=False)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
            _fsync_directory(self.path.parent)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LedgerWriteError(f"Failed to write ledger {self.path}: {e}") from e


def _fsync_directory(directory: Path) -> None:
    """Flush the directory entry so the rename survives a power loss."""
    if os.name != "posix":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
