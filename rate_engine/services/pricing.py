from decimal import Decimal, ROUND_HALF_UP

from rate_engine.schemas.quote import PricingParameters

CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to two decimals, half-up on the cents digit.

    Operates on the shortest decimal repr of the float: 1.005 -> 1.01.
    """
    return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def to_cents(amount: float) -> int:
    return int(Decimal(repr(round2(amount))) * 100)


def compute_rate_per_parcel(
    base_rate: float,
    distance_coefficient: float,
    min_rate: float,
    max_rate: float,
    distance_km: float,
) -> float:
    raw = base_rate + distance_coefficient * distance_km
    if raw < min_rate:
        return min_rate
    if raw > max_rate:
        return max_rate
    return round2(raw)


def compute_total_payout(rate: float, parcel_count: int) -> float:
    return round2(rate * parcel_count)


def price_quote(params: PricingParameters, distance_km: float, parcel_count: int) -> tuple[float, float]:
    # callers validate distance_km and parcel_count
    rate = compute_rate_per_parcel(
        params.base_rate,
        params.distance_coefficient,
        params.min_rate,
        params.max_rate,
        distance_km,
    )
    return round2(rate), compute_total_payout(rate, parcel_count)
