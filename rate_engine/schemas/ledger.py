from typing import Optional

from pydantic import BaseModel, ConfigDict


class LedgerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    route_id: str
    driver_id: Optional[str] = None
    config_version: str
    service_version: str
    rate_cents: int
    total_cents: int
    parcel_count: int
    planned_distance_km: float
    snapshot_path: str
    input_hash: str
    output_hash: str
    created_at: Optional[str] = None
