from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime


class NoteSchema(BaseModel):
    id: int
    user_id: int
    title: Optional[str] = None
    content: str
    color: str
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


class NoteCreatePayload(BaseModel):
    content: str
    title: Optional[str] = None
    color: str = "default"
    model_config = ConfigDict(extra="forbid")

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Content is required")
        return v
