from __future__ import annotations
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime
from user.schemas import UserSummary


class AssignedUserSchema(BaseModel):
    id: int
    name: str
    email: str
    assigned_at: UTCDateTime
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class AssignPayload(BaseModel):
    user_ids: list[int]
    model_config = ConfigDict(extra="forbid")

    @field_validator("user_ids", mode="before")
    @classmethod
    def must_be_list(cls, v):
        if not isinstance(v, list):
            raise ValueError("user_ids must be an array")
        return v


class AssignResponse(BaseModel):
    assigned_users: list[UserSummary]
