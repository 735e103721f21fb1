"""Pydantic schemas for the governance API. Strict validation, no state or infrastructure."""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from medaccess.domain.models.record import DataRecord


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class DataRecordCreateRequest(BaseModel):
    """Patient appends an opaque reference to their own record sequence."""

    data_hash: str = Field(..., description="Opaque reference to off-system data")
    description: str = Field(..., description="Human-readable description")


class AccessRequestCreate(BaseModel):
    """Doctor asks a subject for access. Rate-limited, grants nothing by itself."""

    subject: str = Field(..., description="Identity of the patient whose records are requested")


class AccessGrantCreate(BaseModel):
    grantee: str = Field(..., description="Doctor identity to receive read access")


class PrincipalRegistration(BaseModel):
    principal_id: str = Field(..., description="Identity receiving the role")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class DataRecordResponse(BaseModel):
    data_hash: str
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record: DataRecord) -> "DataRecordResponse":
        return cls.model_validate(record)


class DataRecordCreatedResponse(BaseModel):
    index: int
    record: DataRecordResponse


class RecordPageResponse(BaseModel):
    subject: str
    start: int
    end: int
    records: List[DataRecordResponse]


class RecordCountResponse(BaseModel):
    subject: str
    count: int


class AccessStatusResponse(BaseModel):
    subject: str
    grantee: str
    granted: bool


class AuditTrailResponse(BaseModel):
    offset: int
    limit: int
    records: List[Dict[str, Any]]
