"""Append-only payout ledger"""
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from rate_engine.core.errors import LedgerAppendError
from rate_engine.core.metrics import track_persistence
from rate_engine.schemas.ledger import LedgerEntry

logger = logging.getLogger(__name__)

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


class AppendOnlyLog(ABC):
    """Ordered, durable log of ledger entries.

    Implementations own their synchronization: concurrent callers must never
    observe interleaved or partially written entries.
    """

    @abstractmethod
    def append(self, entry: LedgerEntry) -> LedgerEntry:
        """Append one entry and return it as stored (created_at stamped)."""


class FileLedger(AppendOnlyLog):
    """Newline-delimited JSON ledger file, one entry per line."""

    def __init__(self, path: str, clock: Optional[Callable[[], datetime]] = None):
        self.path = Path(path)
        self._clock = clock
        self._lock = threading.Lock()

    def _stamp(self, entry: LedgerEntry) -> LedgerEntry:
        if entry.created_at:
            return entry
        now = self._clock() if self._clock else None
        return entry.model_copy(update={"created_at": utc_timestamp(now)})

    @track_persistence("ledger")
    def append(self, entry: LedgerEntry) -> LedgerEntry:
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    stored = self._stamp(entry)
                    line = json.dumps(stored.model_dump(), ensure_ascii=False) + "\n"
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                logger.error(f"Ledger append failed for entry {entry.id}: {e}")
                raise LedgerAppendError(str(e)) from e

        logger.info(f"Ledger entry {stored.id} appended to {self.path}")
        return stored
