from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime


class ReminderSchema(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    reminder_date: UTCDateTime
    is_completed: bool
    priority: str
    created_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


class ReminderCreatePayload(BaseModel):
    title: str
    reminder_date: datetime
    description: Optional[str] = None
    priority: str = "normal"
    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title and reminder date are required")
        return v


class ReminderUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    reminder_date: Optional[datetime] = None
    priority: Optional[str] = None
    is_completed: Optional[bool] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v
