"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import Protocol

from medaccess.governance.audit_models import AuditRecord


class AuditRepository(Protocol):
    """Protocol for persisting immutable audit records."""

    async def save(self, record: AuditRecord) -> None:
        """Persist an immutable audit record. Must not allow mutation."""
        ...


class InMemoryAuditRepository:
    """Append-only, ordered list of audit records. Default sink; also used in tests."""

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []

    async def save(self, record: AuditRecord) -> None:
        self._records.append(record)

    async def list_records(self, offset: int = 0, limit: int = 100) -> list[AuditRecord]:
        return self._records[offset : offset + limit]

    def __len__(self) -> int:
        return len(self._records)


class FanOutAuditRepository:
    """Saves each record to every repository, in order. First failure propagates."""

    def __init__(self, *repositories: AuditRepository) -> None:
        self._repositories = repositories

    async def save(self, record: AuditRecord) -> None:
        for repository in self._repositories:
            await repository.save(record)
