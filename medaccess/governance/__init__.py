"""Governance: immutable, ordered audit trail. No FastAPI."""

from medaccess.governance.audit_logger import AuditLogger
from medaccess.governance.audit_models import (
    AccessGranted,
    AccessRequested,
    AccessRevoked,
    AuditEventType,
    AuditRecord,
    DataAdded,
)
from medaccess.governance.audit_repository import (
    AuditRepository,
    FanOutAuditRepository,
    InMemoryAuditRepository,
)

__all__ = [
    "AuditLogger",
    "AuditRepository",
    "InMemoryAuditRepository",
    "FanOutAuditRepository",
    "AuditRecord",
    "AuditEventType",
    "DataAdded",
    "AccessRequested",
    "AccessGranted",
    "AccessRevoked",
]
