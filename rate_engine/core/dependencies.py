from fastapi import Request

from rate_engine.core.config import settings
from rate_engine.services.quotes import QuoteService
from rate_engine.storage.ledger import FileLedger
from rate_engine.storage.snapshot import SnapshotWriter

TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}

# shared by all requests; its ledger lock serializes appends
quote_service = QuoteService(
    snapshots=SnapshotWriter(settings.SNAPSHOT_DIR),
    ledger=FileLedger(settings.LEDGER_PATH),
    service_version=settings.SERVICE_VERSION,
)


def get_quote_service() -> QuoteService:
    return quote_service


def parse_bool(value: str) -> bool:
    if value in TRUE_LITERALS:
        return True
    if value in FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {value!r}")


def parse_persist_flag(request: Request) -> bool:
    """X-Persist header wins over the persist query parameter; junk means false."""
    value = request.headers.get("X-Persist") or request.query_params.get("persist")
    if not value:
        return False
    try:
        return parse_bool(value)
    except ValueError:
        return False
