"""Snapshot writer: one indented JSON audit document per persisted quote"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from rate_engine.core.errors import SnapshotWriteError
from rate_engine.core.metrics import track_persistence
from rate_engine.schemas.snapshot import SnapshotRecord

logger = logging.getLogger(__name__)

UNSAFE_CHARS = {"/", "\\", " ", ":"}
EMPTY_ROUTE_TOKEN = "route"
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
MAX_SUFFIX = 1000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_route_id(route_id: str) -> str:
    if not route_id:
        return EMPTY_ROUTE_TOKEN
    return "".join("_" if ch in UNSAFE_CHARS else ch for ch in route_id)


class SnapshotWriter:
    def __init__(self, directory: str, clock: Optional[Callable[[], datetime]] = None):
        self.directory = Path(directory)
        self._clock = clock or utc_now

    def _candidate_names(self, route_id: str):
        stem = f"{self._clock().strftime(TIMESTAMP_FORMAT)}_{sanitize_route_id(route_id)}"
        yield f"{stem}.json"
        for n in range(1, MAX_SUFFIX):
            yield f"{stem}_{n}.json"

    @track_persistence("snapshot")
    def save(self, route_id: str, record: SnapshotRecord) -> str:
        """Write the record and return its location.

        Files are created exclusively, so a same-second snapshot for the same
        route gets a numeric suffix instead of replacing an earlier one.
        """
        document = json.dumps(record.model_dump(by_alias=True), indent=2, ensure_ascii=False) + "\n"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            for name in self._candidate_names(route_id):
                path = self.directory / name
                try:
                    f = open(path, "x", encoding="utf-8")
                except FileExistsError:
                    continue
                with f:
                    f.write(document)
                    f.flush()
                    os.fsync(f.fileno())
                logger.info(f"Snapshot saved for route {route_id!r} at {path}")
                return str(path)
        except (OSError, ValueError) as e:
            logger.error(f"Snapshot write failed for route {route_id!r}: {e}")
            raise SnapshotWriteError(str(e)) from e

        logger.error(f"Snapshot names exhausted for route {route_id!r} in {self.directory}")
        raise SnapshotWriteError(f"no free snapshot name for route {route_id!r}")

    def load(self, location: str) -> SnapshotRecord:
        with open(location, encoding="utf-8") as f:
            return SnapshotRecord.model_validate(json.load(f))
