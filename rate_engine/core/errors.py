class RateEngineError(Exception):
    """Base class for errors raised by the quote pipeline."""


class QuoteValidationError(RateEngineError):
    """Quote input is out of range; nothing was computed."""


class PersistenceError(RateEngineError):
    """A snapshot or ledger write failed."""

    detail = "failed to persist quote"


class SnapshotWriteError(PersistenceError):
    detail = "failed to save snapshot"


class LedgerAppendError(PersistenceError):
    detail = "failed to append ledger"
