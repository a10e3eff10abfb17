"""Quote pipeline: validate, price, fingerprint and optionally persist"""
import logging
import math
import uuid
from datetime import datetime
from typing import Callable, Optional

from rate_engine.core.errors import QuoteValidationError
from rate_engine.core.metrics import quotes_computed
from rate_engine.schemas.ledger import LedgerEntry
from rate_engine.schemas.quote import PricingParameters, QuoteRequest, QuoteResult
from rate_engine.schemas.snapshot import SnapshotRecord
from rate_engine.services.pricing import price_quote, to_cents
from rate_engine.storage.ledger import AppendOnlyLog, utc_timestamp
from rate_engine.storage.snapshot import SnapshotWriter
from rate_engine.utils.hashing import input_trace, output_hash

logger = logging.getLogger(__name__)


def validate_quote_input(req: QuoteRequest) -> None:
    if not math.isfinite(req.planned_distance_km) or req.planned_distance_km < 0:
        raise QuoteValidationError("plannedDistanceKm must be >= 0")
    if req.parcel_count <= 0:
        raise QuoteValidationError("parcelCount must be >= 1")


def calculate_quote(req: QuoteRequest, params: PricingParameters) -> QuoteResult:
    validate_quote_input(req)

    rate, total = price_quote(params, req.planned_distance_km, req.parcel_count)
    total_cents = to_cents(total)
    return QuoteResult(
        rate_per_parcel=rate,
        total_payout=total,
        rate_cents=to_cents(rate),
        total_cents=total_cents,
        config_version=params.version,
        trace=input_trace(req),
        output_hash=output_hash(total_cents),
    )


class QuoteService:
    def __init__(
        self,
        snapshots: SnapshotWriter,
        ledger: AppendOnlyLog,
        service_version: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.snapshots = snapshots
        self.ledger = ledger
        self.service_version = service_version
        self._clock = clock

    def quote(self, req: QuoteRequest, params: PricingParameters, persist: bool = False) -> QuoteResult:
        result = calculate_quote(req, params)
        if persist:
            self.persist(req, result)
        quotes_computed.labels(
            config_version=result.config_version,
            persisted=str(persist).lower()
        ).inc()
        return result

    def persist(self, req: QuoteRequest, result: QuoteResult) -> LedgerEntry:
        """Write the snapshot, then the ledger row that points at it.

        A snapshot failure stops before the ledger is touched. A ledger
        failure leaves the snapshot behind as an orphaned audit artifact.
        """
        record = SnapshotRecord(
            route_id=req.route_id,
            driver_id=req.driver_id,
            planned_distance_km=req.planned_distance_km,
            parcel_count=req.parcel_count,
            metadata=req.metadata,
            input_hash=result.trace,
            output_hash=result.output_hash,
            config_version=result.config_version,
            service_version=self.service_version,
            rate_per_parcel_zar=result.rate_per_parcel,
            total_payout_zar=result.total_payout,
            created_at=utc_timestamp(self._clock() if self._clock else None),
        )
        path = self.snapshots.save(req.route_id, record)

        entry = LedgerEntry(
            id=str(uuid.uuid4()),
            route_id=req.route_id,
            driver_id=req.driver_id,
            config_version=result.config_version,
            service_version=self.service_version,
            rate_cents=result.rate_cents,
            total_cents=result.total_cents,
            parcel_count=req.parcel_count,
            planned_distance_km=req.planned_distance_km,
            snapshot_path=path,
            input_hash=result.trace,
            output_hash=result.output_hash,
        )
        try:
            return self.ledger.append(entry)
        except Exception:
            logger.warning(f"Snapshot {path} left without ledger entry for trace {result.trace}")
            raise
