from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime
from .models import TaskStatus


class TaskSchema(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: str
    assigned_to: int
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    due_date: Optional[date] = None
    created_at: Optional[UTCDateTime] = None
    completed_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class TaskCreatePayload(BaseModel):
    title: str
    assigned_to: int
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.pending
    priority: str = "normal"
    due_date: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title and assigned_to are required")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# INTERNAL DTO for the service
class TaskCreate(BaseModel):
    title: str
    assigned_to: int
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.pending
    priority: str = "normal"
    due_date: Optional[date] = None
    created_by: int


# Unknown keys are ignored: assignees send back the whole task with a new status
class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
