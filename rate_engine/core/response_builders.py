from rate_engine.schemas.quote import QuoteResponse, QuoteResult


def build_quote_response(result: QuoteResult) -> QuoteResponse:
    return QuoteResponse(
        rate_per_parcel_zar=result.rate_per_parcel,
        total_payout_zar=result.total_payout,
        config_version=result.config_version,
        trace=result.trace,
    )
