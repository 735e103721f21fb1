"""FastAPI dependency injection: GovernanceService singleton, caller principal, correlation_id."""

import logging
from datetime import timedelta

from fastapi import Request

from medaccess.access.access_registry import AccessRegistry
from medaccess.access.cooldown import CooldownTracker
from medaccess.application.governance_service import GovernanceService
from medaccess.config.settings import AppSettings, get_settings
from medaccess.core.clock import Clock, SystemClock
from medaccess.governance.audit_logger import AuditLogger
from medaccess.governance.audit_repository import FanOutAuditRepository, InMemoryAuditRepository
from medaccess.infrastructure.messaging.rabbitmq_audit_publisher import RabbitMQAuditPublisher
from medaccess.observability.metrics import MetricsCollector
from medaccess.records.record_store import RecordStore
from medaccess.security.roles import InMemoryRoleAuthority

_governance_service: GovernanceService | None = None
_metrics: MetricsCollector | None = None
_audit_publisher: RabbitMQAuditPublisher | None = None


def get_metrics() -> MetricsCollector:
    """Return singleton metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def build_governance_service(
    settings: AppSettings,
    clock: Clock | None = None,
    metrics: MetricsCollector | None = None,
    publisher: RabbitMQAuditPublisher | None = None,
) -> GovernanceService:
    """
    Wire stores, audit sink and role authority from settings. Bootstrap admin gets ADMIN.
    With audit_sink=rabbitmq, records also go to publisher after the in-memory log.
    """
    clock = clock or SystemClock()
    audit_log = InMemoryAuditRepository()
    sink = audit_log
    if settings.audit_sink == "rabbitmq":
        publisher = publisher or RabbitMQAuditPublisher(settings.rabbitmq_url, settings.audit_exchange)
        sink = FanOutAuditRepository(audit_log, publisher)
    cooldown = CooldownTracker(
        window=timedelta(seconds=settings.access_request_cooldown_seconds),
        metrics_callback=metrics,
    )
    return GovernanceService(
        role_authority=InMemoryRoleAuthority(admins=(settings.bootstrap_admin_id,)),
        record_store=RecordStore(),
        access_registry=AccessRegistry(cooldown=cooldown),
        audit_logger=AuditLogger(repository=sink, clock=clock),
        clock=clock,
        logger=logging.getLogger("medaccess.governance"),
        metrics=metrics,
        audit_reader=audit_log,
    )


def get_governance_service() -> GovernanceService:
    """Return singleton GovernanceService; state lives for the process."""
    global _governance_service
    if _governance_service is None:
        _governance_service = build_governance_service(
            get_settings(),
            metrics=get_metrics(),
            publisher=get_audit_publisher(),
        )
    return _governance_service


def get_audit_publisher() -> RabbitMQAuditPublisher | None:
    """Return singleton RabbitMQ audit publisher, or None when audit_sink is memory."""
    global _audit_publisher
    settings = get_settings()
    if settings.audit_sink != "rabbitmq":
        return None
    if _audit_publisher is None:
        _audit_publisher = RabbitMQAuditPublisher(settings.rabbitmq_url, settings.audit_exchange)
    return _audit_publisher


async def close_audit_publisher() -> None:
    """Close the broker connection on shutdown, if one was opened."""
    global _audit_publisher
    if _audit_publisher is not None:
        await _audit_publisher.close()
        _audit_publisher = None


def get_principal_id(request: Request) -> str:
    """Extract caller principal from request.state (set by middleware)."""
    return request.state.principal_id


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
