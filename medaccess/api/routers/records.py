"""Records API router: POST /records (patient appends), GET /records/{subject} (paged read)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from medaccess.api.dependencies import get_correlation_id, get_governance_service, get_principal_id
from medaccess.application.governance_service import GovernanceService
from medaccess.domain.schemas.record import (
    DataRecordCreatedResponse,
    DataRecordCreateRequest,
    DataRecordResponse,
    RecordCountResponse,
    RecordPageResponse,
)

router = APIRouter()


@router.post("", response_model=DataRecordCreatedResponse, status_code=201)
async def add_data_record(
    body: DataRecordCreateRequest,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    """Append a record reference to the caller's own sequence. Caller must be a patient."""
    receipt = await service.add_data_record(
        principal_id,
        body.data_hash,
        body.description,
        correlation_id=correlation_id,
    )
    return DataRecordCreatedResponse(
        index=receipt.index,
        record=DataRecordResponse.from_record(receipt.record),
    )


@router.get("/{subject}", response_model=RecordPageResponse)
async def view_data_records(
    subject: str,
    principal_id: Annotated[str, Depends(get_principal_id)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
    start: Annotated[int, Query(ge=0)] = 0,
    end: Annotated[int, Query(ge=0)] = 10,
):
    """Records [start, end) of subject. Caller must be the subject or hold a grant."""
    records = await service.view_data_records(
        principal_id,
        subject,
        start,
        end,
        correlation_id=correlation_id,
    )
    return RecordPageResponse(
        subject=subject,
        start=start,
        end=end,
        records=[DataRecordResponse.from_record(r) for r in records],
    )


@router.get("/{subject}/count", response_model=RecordCountResponse)
async def record_count(
    subject: str,
    principal_id: Annotated[str, Depends(get_principal_id)],
    service: Annotated[GovernanceService, Depends(get_governance_service)],
):
    count = await service.record_count(principal_id, subject)
    return RecordCountResponse(subject=subject, count=count)
