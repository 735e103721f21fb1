"""Immutable audit logging for regulated traceability. No FastAPI."""

import itertools
import logging

from medaccess.core.clock import Clock, SystemClock
from medaccess.governance.audit_models import AuditEvent, AuditRecord
from medaccess.governance.audit_repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Wraps each audit event in a sequenced AuditRecord and writes it via repository.
    Sequence numbers are strictly increasing in emission order.
    Logs structured JSON for every record written.
    """

    def __init__(self, repository: AuditRepository, clock: Clock | None = None) -> None:
        self._repository = repository
        self._clock = clock or SystemClock()
        self._sequence = itertools.count(1)

    async def emit(self, event: AuditEvent, *, correlation_id: str | None = None) -> AuditRecord:
        """Write one immutable audit record for event. Returns the stored record."""
        record = AuditRecord(
            sequence=next(self._sequence),
            event=event,
            recorded_at=self._clock.now(),
            correlation_id=correlation_id,
        )
        await self._repository.save(record)
        logger.info("audit_event", extra={"audit": record.to_dict()})
        return record
