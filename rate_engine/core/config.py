import logging

from pydantic import field_validator, ValidationInfo
from pydantic_settings import BaseSettings

from rate_engine.schemas.quote import PricingParameters

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_VERSION = "model_c_v1"


class Settings(BaseSettings):
    SNAPSHOT_DIR: str = "snapshots"
    LEDGER_PATH: str = "ledger/payouts_ledger.ndjson"
    SERVICE_VERSION: str = "rate-engine-v1.0.0"

    API_TITLE: str = "AfroGo Rate Engine"
    API_DESCRIPTION: str = "Per-parcel payout quotes with snapshot and ledger audit trail"
    API_VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class PricingSettings(BaseSettings):
    """Pricing parameters, re-read from the environment on every request."""

    BASE_RATE_ZAR: float = 30.00
    KM_FACTOR_ZAR: float = 0.125
    MIN_RATE_PER_PARCEL_ZAR: float = 25.00
    MAX_RATE_PER_PARCEL_ZAR: float = 80.00
    CONFIG_VERSION: str = DEFAULT_CONFIG_VERSION

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator(
        "BASE_RATE_ZAR",
        "KM_FACTOR_ZAR",
        "MIN_RATE_PER_PARCEL_ZAR",
        "MAX_RATE_PER_PARCEL_ZAR",
        mode="before",
    )
    @classmethod
    def fallback_on_bad_number(cls, value, info: ValidationInfo):
        default = cls.model_fields[info.field_name].default
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparsable {info.field_name}={value!r}, using {default}")
            return default

    @field_validator("CONFIG_VERSION", mode="before")
    @classmethod
    def default_version(cls, value):
        return value or DEFAULT_CONFIG_VERSION

    def to_parameters(self) -> PricingParameters:
        return PricingParameters(
            base_rate=self.BASE_RATE_ZAR,
            distance_coefficient=self.KM_FACTOR_ZAR,
            min_rate=self.MIN_RATE_PER_PARCEL_ZAR,
            max_rate=self.MAX_RATE_PER_PARCEL_ZAR,
            version=self.CONFIG_VERSION,
        )


def load_pricing_parameters() -> PricingParameters:
    return PricingSettings().to_parameters()


settings = Settings()
