from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

from core.clock import UTCDateTime

# free-form; urgent, high and normal sort first, any other value after them
Priority = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=16)]


class AnnouncementSchema(BaseModel):
    id: int
    title: str
    content: str
    priority: str
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    expires_at: Optional[UTCDateTime] = None
    target_user_ids: list[int] = []
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class AnnouncementCreatePayload(BaseModel):
    title: str
    content: str
    priority: Priority = "normal"
    expires_at: Optional[datetime] = None
    target_user_ids: list[int] = []
    model_config = ConfigDict(extra="forbid")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title and content are required")
        return v

    @field_validator("expires_at", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# INTERNAL DTO for the service
class AnnouncementCreate(BaseModel):
    title: str
    content: str
    priority: Priority = "normal"
    expires_at: Optional[datetime] = None
    target_user_ids: list[int] = []
    created_by: int


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    priority: Optional[Priority] = None
    expires_at: Optional[datetime] = None
    # omitted keeps the current targets; [] makes it visible to everyone
    target_user_ids: Optional[list[int]] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title and content cannot be empty")
        return v

    @field_validator("expires_at", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
