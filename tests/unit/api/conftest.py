"""Fixtures for API unit tests: fresh GovernanceService per test, fixed clock, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from medaccess.api import dependencies
from medaccess.config.settings import AppSettings
from medaccess.main import app
from medaccess.observability.metrics import MetricsCollector

from tests.unit import principals


@pytest.fixture
def governance_service(clock):
    settings = AppSettings(bootstrap_admin_id=principals.ADMIN, audit_sink="memory")
    return dependencies.build_governance_service(settings, clock=clock, metrics=MetricsCollector())


@pytest.fixture
def app_with_overrides(governance_service):
    """App with the governance service overridden for testing."""
    app.dependency_overrides[dependencies.get_governance_service] = lambda: governance_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides):
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def seeded(client):
    """admin-1 registers patient-1 and doctor-1."""
    admin = {"X-Principal-ID": principals.ADMIN}
    r = await client.post("/admin/patients", json={"principal_id": principals.PATIENT}, headers=admin)
    assert r.status_code == 201
    r = await client.post("/admin/doctors", json={"principal_id": principals.DOCTOR}, headers=admin)
    assert r.status_code == 201
    return client
