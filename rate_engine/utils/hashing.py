import hashlib
import json

from rate_engine.schemas.quote import QuoteRequest


def canonical_input(req: QuoteRequest) -> bytes:
    """Compact JSON of the request in fixed field order.

    Optional fields are always emitted (null when absent) and metadata keeps
    the order it was received in.
    """
    payload = {
        "routeId": req.route_id,
        "plannedDistanceKm": float(req.planned_distance_km),
        "parcelCount": req.parcel_count,
        "driverId": req.driver_id,
        "metadata": req.metadata,
    }
    s = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def payload_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def input_trace(req: QuoteRequest) -> str:
    return payload_hash(canonical_input(req))


def output_hash(total_cents: int) -> str:
    return payload_hash(str(total_cents).encode("utf-8"))
