"""Pricing quote endpoint"""
import logging
from fastapi import APIRouter, Depends

from rate_engine.schemas.quote import PricingParameters, QuoteRequest, QuoteResponse
from rate_engine.services.quotes import QuoteService
from rate_engine.core.config import load_pricing_parameters
from rate_engine.core.dependencies import get_quote_service, parse_persist_flag
from rate_engine.core.response_builders import build_quote_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1", tags=["quotes"])


@router.post("/quote", response_model=QuoteResponse)
def create_quote(
    req: QuoteRequest,
    persist: bool = Depends(parse_persist_flag),
    params: PricingParameters = Depends(load_pricing_parameters),
    service: QuoteService = Depends(get_quote_service),
):
    result = service.quote(req, params, persist=persist)
    logger.info(
        f"Quoted route {req.route_id!r}: rate={result.rate_per_parcel} "
        f"total={result.total_payout} version={result.config_version} persisted={persist}"
    )
    return build_quote_response(result)
