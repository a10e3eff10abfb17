from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class PricingParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_rate: float
    distance_coefficient: float
    min_rate: float
    max_rate: float
    version: str


class QuoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    route_id: str = Field(default="", alias="routeId", strict=True)
    planned_distance_km: float = Field(default=0.0, alias="plannedDistanceKm", strict=True)
    parcel_count: int = Field(default=0, alias="parcelCount", strict=True)
    driver_id: Optional[str] = Field(default=None, alias="driverId")
    metadata: Optional[Dict[str, JsonValue]] = None


class QuoteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate_per_parcel: float
    total_payout: float
    rate_cents: int
    total_cents: int
    config_version: str
    trace: str
    output_hash: str


class QuoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rate_per_parcel_zar: float = Field(alias="ratePerParcelZar")
    total_payout_zar: float = Field(alias="totalPayoutZar")
    config_version: str = Field(alias="configVersion")
    trace: str
