import pytest
from datetime import datetime, timezone
from httpx import AsyncClient, ASGITransport

from rate_engine.main import app
from rate_engine.core.config import load_pricing_parameters
from rate_engine.core.dependencies import get_quote_service
from rate_engine.schemas.quote import PricingParameters
from rate_engine.services.quotes import QuoteService
from rate_engine.storage.ledger import FileLedger
from rate_engine.storage.snapshot import SnapshotWriter


FIXED_NOW = datetime(2026, 10, 19, 8, 30, 15, tzinfo=timezone.utc)


@pytest.fixture
def pricing_params():
    return PricingParameters(
        base_rate=30.00,
        distance_coefficient=0.125,
        min_rate=25.00,
        max_rate=80.00,
        version="model_c_v1",
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def snapshot_dir(tmp_path):
    return tmp_path / "snapshots"


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "ledger" / "payouts_ledger.ndjson"


@pytest.fixture
def snapshot_writer(snapshot_dir, fixed_clock):
    return SnapshotWriter(str(snapshot_dir), clock=fixed_clock)


@pytest.fixture
def file_ledger(ledger_path):
    return FileLedger(str(ledger_path))


@pytest.fixture
def quote_service(snapshot_writer, file_ledger):
    return QuoteService(
        snapshots=snapshot_writer,
        ledger=file_ledger,
        service_version="rate-engine-test",
    )


@pytest.fixture
async def test_client(quote_service, pricing_params):
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    app.dependency_overrides[load_pricing_parameters] = lambda: pricing_params
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def valid_quote_data():
    return {
        "routeId": "JHB-CPT/042",
        "plannedDistanceKm": 10.0,
        "parcelCount": 12,
        "driverId": "drv-7",
        "metadata": {"depot": "Midrand", "priority": 2, "fragile": False},
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "persistence: marks tests related to snapshots and the ledger"
    )
