"""Access API router: doctor requests, patient grants and revocations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from medaccess.api.dependencies import get_correlation_id, get_governance_service, get_principal_id
from medaccess.application.governance_service import GovernanceService
from medaccess.domain.schemas.record import (
    AccessGrantCreate,
    AccessRequestCreate,
    AccessStatusResponse,
)

router = APIRouter()


@router.post("/requests", status_code=202)
async def request_access(
    body: AccessRequestCreate,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    """Doctor notifies a patient of an access request. Rate-limited per doctor."""
    await service.request_access(principal_id, body.subject, correlation_id=correlation_id)
    return {"requester": principal_id, "subject": body.subject, "status": "requested"}


@router.post("/grants", response_model=AccessStatusResponse)
async def grant_access(
    body: AccessGrantCreate,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    await service.grant_access(principal_id, body.grantee, correlation_id=correlation_id)
    return AccessStatusResponse(subject=principal_id, grantee=body.grantee, granted=True)


@router.delete("/grants/{grantee}", status_code=204)
async def revoke_access(
    grantee: str,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    await service.revoke_access(principal_id, grantee, correlation_id=correlation_id)
    return Response(status_code=204)


@router.get("/grants", response_model=list[str])
async def list_grantees(
    principal_id: Annotated[str, Depends(get_principal_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    """Grantees currently holding access to the caller's records."""
    return service.grantees(principal_id)


@router.get("/grants/{grantee}", response_model=AccessStatusResponse)
async def access_status(
    grantee: str,
    principal_id: Annotated[str, Depends(get_principal_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    """Whether grantee currently holds access to the caller's records."""
    return AccessStatusResponse(
        subject=principal_id,
        grantee=grantee,
        granted=service.has_access(principal_id, grantee),
    )
