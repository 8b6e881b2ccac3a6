from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from core.clock import UTCDateTime


class CommentSchema(BaseModel):
    id: int
    content: str
    user_id: int
    project_id: Optional[int] = None
    meeting_id: Optional[int] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class CommentCreatePayload(BaseModel):
    content: str
    project_id: Optional[int] = None
    meeting_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v

    @model_validator(mode="after")
    def exactly_one_parent(self):
        if (self.project_id is None) == (self.meeting_id is None):
            raise ValueError("Exactly one of project_id or meeting_id is required")
        return self


# INTERNAL DTO for the service
class CommentCreate(BaseModel):
    content: str
    user_id: int
    project_id: Optional[int] = None
    meeting_id: Optional[int] = None


class CommentUpdate(BaseModel):
    content: str
    model_config = ConfigDict(extra="forbid")

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v
