from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.clock import UTCDateTime
from user.models import UserRole

PROFILE_FIELDS = (
    "phone", "date_of_birth", "address", "city", "postal_code", "country",
    "id_number", "tax_number",
    "bank_name", "bank_account_number", "bank_account_type", "branch_code",
    "emergency_contact_name", "emergency_contact_phone", "emergency_contact_relationship",
)


# PUBLIC payload, what clients send; the registration wizard sends blanks as ""
class ProfileUpsert(BaseModel):
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    id_number: Optional[str] = None
    tax_number: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_type: Optional[str] = None
    branch_code: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ProfileView(BaseModel):
    user_id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    id_number: Optional[str] = None
    tax_number: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_type: Optional[str] = None
    branch_code: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    updated_at: Optional[UTCDateTime] = None
    has_profile: bool = False
