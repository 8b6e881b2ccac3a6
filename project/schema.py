from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.clock import UTCDateTime
from user.schemas import UserSummary


class ProjectSchema(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    assigned_users: list[UserSummary] = []
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class ProjectCreatePayload(BaseModel):
    title: str = Field(..., description="Title is required")
    description: Optional[str] = None
    status: Optional[str] = "upcoming"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("start_date", "end_date", "description", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


# INTERNAL DTO for the service
class ProjectCreate(BaseModel):
    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_by: int


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        # omitted keeps the title; an explicit null or blank is rejected
        if v is None or not v.strip():
            raise ValueError("Title cannot be empty")
        return v
