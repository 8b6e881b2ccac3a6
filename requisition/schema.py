from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.clock import UTCDateTime
from .models import RequisitionStatus


class RequisitionSchema(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    title: str
    description: str
    amount: float
    currency: str
    type: str
    status: RequisitionStatus
    priority: str
    requested_date: date
    required_date: Optional[date] = None
    justification: Optional[str] = None
    admin_notes: Optional[str] = None
    processed_by: Optional[int] = None
    processed_by_name: Optional[str] = None
    processed_at: Optional[UTCDateTime] = None
    created_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class RequisitionCreatePayload(BaseModel):
    title: str
    description: str
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    type: str
    requested_date: date
    currency: str = "ZAR"
    priority: str = "normal"
    required_date: Optional[date] = None
    justification: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title", "description", "type")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Missing required fields")
        return v

    @field_validator("required_date", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# INTERNAL DTO for the service
class RequisitionCreate(BaseModel):
    user_id: int
    title: str
    description: str
    amount: Decimal
    type: str
    requested_date: date
    currency: str = "ZAR"
    priority: str = "normal"
    required_date: Optional[date] = None
    justification: Optional[str] = None


class RequisitionStatusUpdate(BaseModel):
    status: RequisitionStatus
    admin_notes: Optional[str] = None
    model_config = ConfigDict(extra="forbid")
