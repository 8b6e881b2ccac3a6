from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr

from employeeprofile.schema import ProfileUpsert
from user.schemas import UserSchema


class LoginPayload(BaseModel):
    email: str
    password: str


class RegisterPayload(BaseModel):
    name: str = ""
    email: EmailStr
    password: str = ""
    confirm_password: Optional[str] = None
    profile: Optional[ProfileUpsert] = None
    model_config = ConfigDict(extra="forbid")


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserSchema
