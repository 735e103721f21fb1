"""Admin API router: role registration and audit trail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from medaccess.api.dependencies import get_correlation_id, get_governance_service, get_principal_id
from medaccess.application.governance_service import GovernanceService
from medaccess.domain.schemas.record import AuditTrailResponse, PrincipalRegistration

router = APIRouter()


@router.post("/patients", status_code=201)
async def register_patient(
    body: PrincipalRegistration,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    await service.register_patient(principal_id, body.principal_id, correlation_id=correlation_id)
    return {"principal_id": body.principal_id, "role": "PATIENT"}


@router.post("/doctors", status_code=201)
async def register_doctor(
    body: PrincipalRegistration,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    await service.register_doctor(principal_id, body.principal_id, correlation_id=correlation_id)
    return {"principal_id": body.principal_id, "role": "DOCTOR"}


@router.get("/audit", response_model=AuditTrailResponse)
async def audit_trail(
    principal_id: Annotated[str, Depends(get_principal_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    records = await service.audit_trail(principal_id, offset=offset, limit=limit)
    return AuditTrailResponse(offset=offset, limit=limit, records=[r.to_dict() for r in records])
