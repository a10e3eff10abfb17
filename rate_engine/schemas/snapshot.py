from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class SnapshotRecord(BaseModel):
    """Denormalized audit copy of one persisted quote."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    route_id: str = Field(alias="routeId")
    driver_id: Optional[str] = Field(default=None, alias="driverId")
    planned_distance_km: float = Field(alias="plannedDistanceKm")
    parcel_count: int = Field(alias="parcelCount")
    metadata: Optional[Dict[str, JsonValue]] = None
    input_hash: str = Field(alias="inputHash")
    output_hash: str = Field(alias="outputHash")
    config_version: str = Field(alias="configVersion")
    service_version: str = Field(alias="serviceVersion")
    rate_per_parcel_zar: float = Field(alias="ratePerParcelZar")
    total_payout_zar: float = Field(alias="totalPayoutZar")
    created_at: str = Field(alias="createdAt")
