from __future__ import annotations
import logging
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.utils.auth_utils import get_password_hash
from user.models import User, UserRole
from user.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_users(db: Session) -> List[User]:
    stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
    return list(db.scalars(stmt))


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email)).first()


def count_admins(db: Session) -> int:
    return db.scalar(select(func.count(User.id)).where(User.role == UserRole.admin)) or 0


def admin_state(db: Session, target: User, new_role: Optional[UserRole] = None) -> dict:
    """Snapshot the policy needs to protect the last remaining admin."""
    return {"target_role": target.role, "admin_count": count_admins(db), "new_role": new_role}


def create_user(db: Session, user: UserCreate) -> User:
    if get_user_by_email(db, str(user.email)):
        raise HTTPException(status_code=400, detail="User already exists")

    db_user = User(
        email=str(user.email),
        name=user.name,
        password_hash=get_password_hash(user.password),
        role=user.role,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User already exists")
    db.refresh(db_user)
    logger.info("created user %s with role %s", db_user.id, db_user.role.value)
    return db_user


def update_user(db: Session, user_id: int, patch: UserUpdate) -> User:
    db_user = db.get(User, user_id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in data:
        data["email"] = str(data["email"])
        other = get_user_by_email(db, data["email"])
        if other is not None and other.id != user_id:
            raise HTTPException(status_code=400, detail="Email already in use")

    old_role = db_user.role
    for k, v in data.items():
        setattr(db_user, k, v)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already in use")
    db.refresh(db_user)
    if db_user.role != old_role:
        logger.info("user %s role changed %s -> %s", user_id, old_role.value, db_user.role.value)
    return db_user


def delete_user(db: Session, user_id: int) -> None:
    db_user = db.get(User, user_id)
    if db_user:
        db.delete(db_user)
        db.commit()
        logger.info("deleted user %s", user_id)
    return


def ensure_admin_user(db: Session, *, email: str, password: str, name: str = "Admin User") -> User:
    """Create the bootstrap admin, or promote the existing account with that email."""
    existing = get_user_by_email(db, email)
    if existing is None:
        admin = User(email=email, name=name, password_hash=get_password_hash(password), role=UserRole.admin)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("created bootstrap admin %s", email)
        return admin
    if existing.role != UserRole.admin:
        existing.role = UserRole.admin
        db.commit()
        db.refresh(existing)
        logger.info("promoted %s to admin", email)
    return existing
