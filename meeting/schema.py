from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime
from user.schemas import UserSummary


class MeetingSchema(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    meeting_date: UTCDateTime
    location: Optional[str] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    assigned_users: list[UserSummary] = []
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class MeetingCreatePayload(BaseModel):
    title: str
    meeting_date: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title and meeting date are required")
        return v


# INTERNAL DTO for the service
class MeetingCreate(BaseModel):
    title: str
    meeting_date: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    created_by: int


class MeetingUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    location: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        # omitted keeps the title; an explicit null or blank is rejected
        if v is None or not v.strip():
            raise ValueError("Title cannot be empty")
        return v
