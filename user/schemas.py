from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator

from core.clock import UTCDateTime
from .models import UserRole


class UserSchema(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    created_at: Optional[UTCDateTime] = None
    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str
    role: UserRole = UserRole.employee
    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Email, password, and name are required")
        return v.strip()


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: Optional[UserRole] = None
    model_config = ConfigDict(extra="forbid")
