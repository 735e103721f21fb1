"""Governance application service — serialization boundary. Orchestrates role check, validate, mutate, audit."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from medaccess.access.access_registry import AccessRegistry
from medaccess.application.exceptions import AuditDeliveryError
from medaccess.core.clock import Clock
from medaccess.domain.exceptions import DomainError, InvalidInputError
from medaccess.domain.models.record import DataRecord
from medaccess.domain.validators.record_validator import (
    validate_identity,
    validate_range,
    validate_record_inputs,
)
from medaccess.governance.audit_logger import AuditLogger
from medaccess.governance.audit_models import (
    AccessGranted,
    AccessRequested,
    AccessRevoked,
    AuditEvent,
    AuditRecord,
    DataAdded,
)
from medaccess.observability.metrics import MetricsCollector
from medaccess.records.record_store import RecordStore
from medaccess.security.exceptions import SecurityError, UnauthorizedError
from medaccess.security.rbac import RBACService
from medaccess.security.roles import Role, RoleAuthority


@dataclass(frozen=True)
class RecordReceipt:
    """Result of a successful append: where the record landed and what was stored."""

    subject: str
    index: int
    record: DataRecord


class AuditReader(Protocol):
    async def list_records(self, offset: int = 0, limit: int = 100) -> list[AuditRecord]: ...


class GovernanceService:
    """
    Façade over RecordStore, AccessRegistry and the audit log. No HTTP, no FastAPI.
    Operations run one at a time under a single lock (one total order). Each is
    check-then-act: every precondition is evaluated before any mutation, so a
    rejected call changes nothing and emits nothing. Successful state changes emit
    exactly one audit event, in application order.
    """

    def __init__(
        self,
        role_authority: RoleAuthority,
        record_store: RecordStore,
        access_registry: AccessRegistry,
        audit_logger: AuditLogger,
        clock: Clock,
        logger: logging.Logger,
        metrics: Optional[MetricsCollector] = None,
        audit_reader: Optional[AuditReader] = None,
    ) -> None:
        self._roles = role_authority
        self._rbac = RBACService(role_authority)
        self._records = record_store
        self._access = access_registry
        self._audit = audit_logger
        self._clock = clock
        self._logger = logger
        self._metrics = metrics
        self._audit_reader = audit_reader
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Patient operations
    # ------------------------------------------------------------------

    async def add_data_record(
        self,
        caller: str,
        data_hash: str,
        description: str,
        *,
        correlation_id: str | None = None,
    ) -> RecordReceipt:
        """Append an opaque record reference to the caller's own sequence. Emits DataAdded."""
        operation = "add_data_record"
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                validate_record_inputs(data_hash, description)
                index = self._records.append(caller, data_hash, description, self._clock.now())
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise
            record = self._records.get(caller, index)
            await self._emit(
                DataAdded(
                    subject=caller,
                    data_hash=record.data_hash,
                    description=record.description,
                    timestamp=record.created_at,
                ),
                operation,
                caller,
                correlation_id,
            )
            return RecordReceipt(subject=caller, index=index, record=record)

    async def grant_access(self, caller: str, grantee: str, *, correlation_id: str | None = None) -> None:
        """Give grantee read access to the caller's records. Grantee must be a doctor right now."""
        operation = "grant_access"
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                validate_identity(grantee, "grantee")
                self._rbac.require_role(grantee, Role.DOCTOR, subject_label="Grantee")
                self._access.grant(caller, grantee)
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise
            await self._emit(AccessGranted(subject=caller, grantee=grantee), operation, caller, correlation_id)

    async def revoke_access(self, caller: str, grantee: str, *, correlation_id: str | None = None) -> None:
        """Withdraw grantee's read access. No role requirement on the grantee."""
        operation = "revoke_access"
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                validate_identity(grantee, "grantee")
                self._access.revoke(caller, grantee)
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise
            await self._emit(AccessRevoked(subject=caller, grantee=grantee), operation, caller, correlation_id)

    # ------------------------------------------------------------------
    # Doctor operations
    # ------------------------------------------------------------------

    async def request_access(self, caller: str, subject: str, *, correlation_id: str | None = None) -> None:
        """Rate-limited notification that caller wants access to subject's records. Grants nothing."""
        operation = "request_access"
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                validate_identity(subject, "subject")
                self._access.request_access(caller, subject, self._clock.now())
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise
            await self._emit(AccessRequested(requester=caller, subject=subject), operation, caller, correlation_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def view_data_records(
        self,
        caller: str,
        subject: str,
        start: int,
        end: int,
        *,
        correlation_id: str | None = None,
    ) -> list[DataRecord]:
        """
        Page through subject's records. Caller must be the subject or currently granted;
        the grant is evaluated now, so a revoke applies to the very next read.
        end <= start fails; end beyond the sequence length is clamped.
        """
        operation = "view_data_records"
        async with self._lock:
            try:
                self._check_read_access(caller, subject)
                validate_range(start, end)
                return self._records.read_range(subject, start, end)
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise

    async def record_count(self, caller: str, subject: str) -> int:
        """Number of records subject holds. Same access rule as view_data_records."""
        async with self._lock:
            try:
                self._check_read_access(caller, subject)
            except (SecurityError, DomainError) as e:
                self._rejected("record_count", caller, e, None)
                raise
            return self._records.count(subject)

    def has_access(self, subject: str, grantee: str) -> bool:
        return self._access.is_granted(subject, grantee)

    def grantees(self, subject: str) -> list[str]:
        return self._access.grantees(subject)

    # ------------------------------------------------------------------
    # Admin operations (role changes are delegated; no audit event)
    # ------------------------------------------------------------------

    async def register_patient(self, caller: str, target: str, *, correlation_id: str | None = None) -> None:
        await self._register(caller, target, Role.PATIENT, "register_patient", correlation_id)

    async def register_doctor(self, caller: str, target: str, *, correlation_id: str | None = None) -> None:
        await self._register(caller, target, Role.DOCTOR, "register_doctor", correlation_id)

    async def audit_trail(self, caller: str, offset: int = 0, limit: int = 100) -> list[AuditRecord]:
        """Read back the audit log in application order. Admin only."""
        operation = "view_audit_trail"
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                if offset < 0 or limit < 1:
                    raise InvalidInputError(
                        f"offset must be non-negative and limit positive, got offset={offset}, limit={limit}"
                    )
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, None)
                raise
            if self._audit_reader is None:
                return []
            return await self._audit_reader.list_records(offset=offset, limit=limit)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _register(
        self,
        caller: str,
        target: str,
        role: Role,
        operation: str,
        correlation_id: str | None,
    ) -> None:
        async with self._lock:
            try:
                self._rbac.check_permission(caller, operation)
                validate_identity(target, "target")
            except (SecurityError, DomainError) as e:
                self._rejected(operation, caller, e, correlation_id)
                raise
            self._roles.grant_role(target, role)
            self._applied(operation, caller, correlation_id, target=target)

    def _check_read_access(self, caller: str, subject: str) -> None:
        validate_identity(caller, "caller")
        if caller != subject and not self._access.is_granted(subject, caller):
            raise UnauthorizedError(f"Principal '{caller}' has no access to records of '{subject}'")

    async def _emit(
        self,
        event: AuditEvent,
        operation: str,
        caller: str,
        correlation_id: str | None,
    ) -> None:
        """Write the audit event for an applied operation. Sink failure does not undo the change."""
        try:
            await self._audit.emit(event, correlation_id=correlation_id)
        except Exception as e:
            self._logger.error(
                "audit_delivery_failed",
                extra={
                    "operation": operation,
                    "caller": caller,
                    "correlation_id": correlation_id,
                    "event_type": event.event_type.value,
                    "error": str(e),
                },
            )
            raise AuditDeliveryError(f"Audit delivery failed for {operation}: {e}") from e
        self._applied(operation, caller, correlation_id)

    def _applied(self, operation: str, caller: str, correlation_id: str | None, **extra) -> None:
        self._logger.info(
            "operation_applied",
            extra={"operation": operation, "caller": caller, "correlation_id": correlation_id, **extra},
        )
        if self._metrics:
            self._metrics.increment("operations_applied", operation=operation)

    def _rejected(self, operation: str, caller: str, error: Exception, correlation_id: str | None) -> None:
        self._logger.warning(
            "operation_rejected",
            extra={
                "operation": operation,
                "caller": caller,
                "correlation_id": correlation_id,
                "reason": type(error).__name__,
                "detail": str(error),
            },
        )
        if self._metrics:
            self._metrics.increment("operations_rejected", operation=operation)
