# Self-service sign up. Mirrors the client wizard (Account, Personal, Banking, Emergency).
from __future__ import annotations
import logging
from enum import Enum

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.schemas import RegisterPayload
from auth.utils.auth_utils import get_password_hash
from employeeprofile.service import apply_profile
from user.models import User, UserRole
from user.service import get_user_by_email

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class RegistrationStep(str, Enum):
    account = "account"
    personal = "personal"
    banking = "banking"
    emergency = "emergency"
    submitted = "submitted"


STEP_TITLES = {
    RegistrationStep.account: "Account",
    RegistrationStep.personal: "Personal",
    RegistrationStep.banking: "Banking",
    RegistrationStep.emergency: "Emergency",
}

# profile steps: (required fields, message)
PROFILE_STEPS = (
    (RegistrationStep.personal, ("phone", "date_of_birth"), "Phone and date of birth are required"),
    (RegistrationStep.banking, ("bank_name", "bank_account_number", "branch_code"),
     "Bank name, account number, and branch code are required"),
    (RegistrationStep.emergency, ("emergency_contact_name", "emergency_contact_phone"),
     "Emergency contact name and phone are required"),
)


class RegistrationError(ValueError):
    def __init__(self, step: RegistrationStep, message: str):
        super().__init__(message)
        self.step = step
        self.message = message

    def __str__(self) -> str:
        return f"{STEP_TITLES[self.step]}: {self.message}"


def _check_account(payload: RegisterPayload) -> None:
    if not payload.name or not payload.email or not payload.password:
        raise RegistrationError(RegistrationStep.account, "All fields are required")
    if payload.confirm_password is not None and payload.password != payload.confirm_password:
        raise RegistrationError(RegistrationStep.account, "Passwords do not match")
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise RegistrationError(
            RegistrationStep.account, f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def check_registration(payload: RegisterPayload) -> RegistrationStep:
    """Walk the wizard steps in order; return `submitted` or raise for the first incomplete step."""
    _check_account(payload)
    if payload.profile is None:
        return RegistrationStep.submitted
    for step, fields, message in PROFILE_STEPS:
        if any(getattr(payload.profile, f) in (None, "") for f in fields):
            raise RegistrationError(step, message)
    return RegistrationStep.submitted


def register_user(db: Session, payload: RegisterPayload) -> User:
    try:
        check_registration(payload)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if get_user_by_email(db, str(payload.email)):
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=str(payload.email),
        name=payload.name,
        password_hash=get_password_hash(payload.password),
        role=UserRole.employee,
    )
    try:
        db.add(user)
        db.flush()
        if payload.profile is not None:
            apply_profile(db, user.id, payload.profile)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User already exists")
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("registered user %s (profile=%s)", user.id, payload.profile is not None)
    return user
