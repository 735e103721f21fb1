"""Shared fixtures: controllable clock, seeded role authority, wired GovernanceService."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from medaccess.access.access_registry import AccessRegistry
from medaccess.access.cooldown import CooldownTracker
from medaccess.application.governance_service import GovernanceService
from medaccess.governance.audit_logger import AuditLogger
from medaccess.governance.audit_repository import InMemoryAuditRepository
from medaccess.observability.metrics import MetricsCollector
from medaccess.records.record_store import RecordStore
from medaccess.security.roles import InMemoryRoleAuthority, Role

from tests.unit.principals import ADMIN, DOCTOR, OTHER_DOCTOR, OTHER_PATIENT, PATIENT

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def role_authority():
    authority = InMemoryRoleAuthority(admins=(ADMIN,))
    authority.grant_role(PATIENT, Role.PATIENT)
    authority.grant_role(OTHER_PATIENT, Role.PATIENT)
    authority.grant_role(DOCTOR, Role.DOCTOR)
    authority.grant_role(OTHER_DOCTOR, Role.DOCTOR)
    return authority


@pytest.fixture
def audit_repository():
    return InMemoryAuditRepository()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def record_store():
    return RecordStore()


@pytest.fixture
def access_registry(metrics):
    return AccessRegistry(cooldown=CooldownTracker(window=timedelta(minutes=5), metrics_callback=metrics))


@pytest.fixture
def service(role_authority, record_store, access_registry, audit_repository, clock, metrics):
    return GovernanceService(
        role_authority=role_authority,
        record_store=record_store,
        access_registry=access_registry,
        audit_logger=AuditLogger(repository=audit_repository, clock=clock),
        clock=clock,
        logger=logging.getLogger("test.governance"),
        metrics=metrics,
        audit_reader=audit_repository,
    )
