from __future__ import annotations
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from user.models import User
from .models import EmployeeProfile
from .schema import PROFILE_FIELDS, ProfileUpsert


def get_profile(db: Session, user_id: int) -> Optional[EmployeeProfile]:
    return db.scalars(select(EmployeeProfile).where(EmployeeProfile.user_id == user_id)).first()


def profile_view(user: User, profile: Optional[EmployeeProfile]) -> dict:
    """User fields merged with profile fields; profile fields are None when there is no profile."""
    view = {
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "has_profile": profile is not None,
        "updated_at": profile.updated_at if profile else None,
    }
    for field in PROFILE_FIELDS:
        view[field] = getattr(profile, field) if profile else None
    return view


def get_profile_view(db: Session, user: User) -> dict:
    return profile_view(user, get_profile(db, user.id))


def list_profile_views(db: Session) -> List[dict]:
    stmt = (
        select(User, EmployeeProfile)
        .outerjoin(EmployeeProfile, EmployeeProfile.user_id == User.id)
        .order_by(User.name.asc(), User.id.asc())
    )
    return [profile_view(user, profile) for user, profile in db.execute(stmt).all()]


def apply_profile(db: Session, user_id: int, payload: ProfileUpsert) -> EmployeeProfile:
    """Create or update the profile row without committing."""
    row = get_profile(db, user_id)
    data = payload.model_dump(exclude_unset=True)
    if row is None:
        row = EmployeeProfile(user_id=user_id)
        db.add(row)
    for k, v in data.items():
        setattr(row, k, v)
    return row


def upsert_profile(db: Session, user: User, payload: ProfileUpsert) -> dict:
    row = apply_profile(db, user.id, payload)
    db.commit()
    db.refresh(row)
    return profile_view(user, row)
