"""Immutable audit event models. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union


class AuditEventType(str, Enum):
    DATA_ADDED = "DataAdded"
    ACCESS_REQUESTED = "AccessRequested"
    ACCESS_GRANTED = "AccessGranted"
    ACCESS_REVOKED = "AccessRevoked"


@dataclass(frozen=True)
class DataAdded:
    event_type: ClassVar[AuditEventType] = AuditEventType.DATA_ADDED

    subject: str
    data_hash: str
    description: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "data_hash": self.data_hash,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AccessRequested:
    event_type: ClassVar[AuditEventType] = AuditEventType.ACCESS_REQUESTED

    requester: str
    subject: str

    def to_dict(self) -> Dict[str, Any]:
        return {"requester": self.requester, "subject": self.subject}


@dataclass(frozen=True)
class AccessGranted:
    event_type: ClassVar[AuditEventType] = AuditEventType.ACCESS_GRANTED

    subject: str
    grantee: str

    def to_dict(self) -> Dict[str, Any]:
        return {"subject": self.subject, "grantee": self.grantee}


@dataclass(frozen=True)
class AccessRevoked:
    event_type: ClassVar[AuditEventType] = AuditEventType.ACCESS_REVOKED

    subject: str
    grantee: str

    def to_dict(self) -> Dict[str, Any]:
        return {"subject": self.subject, "grantee": self.grantee}


AuditEvent = Union[DataAdded, AccessRequested, AccessGranted, AccessRevoked]


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable envelope for one audit event: sequence number (application order),
    the event, when it was recorded (UTC) and the correlation_id of the causing call.
    """

    sequence: int
    event: AuditEvent
    recorded_at: datetime
    correlation_id: Optional[str] = None

    @property
    def event_type(self) -> AuditEventType:
        return self.event.event_type

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging and publishing."""
        return {
            "sequence": self.sequence,
            "event_type": self.event_type.value,
            "payload": self.event.to_dict(),
            "recorded_at": self.recorded_at.isoformat(),
            "correlation_id": self.correlation_id,
        }
