# Assignment is a full replace, done in one transaction.
from __future__ import annotations
import logging
from typing import Iterable, List

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.clock import utcnow
from meeting.models import Meeting
from project.models import Project
from user.models import User
from .models import MeetingAssignment, ProjectAssignment

logger = logging.getLogger(__name__)

# resource name -> (parent model, assignment model, fk column name, not-found message)
_KINDS = {
    "project": (Project, ProjectAssignment, "project_id", "Project not found"),
    "meeting": (Meeting, MeetingAssignment, "meeting_id", "Meeting not found"),
}


def _dedupe(user_ids: Iterable[int]) -> list[int]:
    seen: dict[int, None] = {}
    for uid in user_ids:
        seen.setdefault(uid, None)
    return list(seen)


def _require_parent(db: Session, kind: str, resource_id: int):
    parent_model, _, _, missing = _KINDS[kind]
    if db.get(parent_model, resource_id) is None:
        raise HTTPException(status_code=404, detail=missing)


def get_assigned_users(db: Session, kind: str, resource_id: int) -> List[User]:
    _, model, fk, _ = _KINDS[kind]
    stmt = (
        select(User)
        .join(model, model.user_id == User.id)
        .where(getattr(model, fk) == resource_id)
        .order_by(model.id)
    )
    return list(db.scalars(stmt))


def get_assignments(db: Session, kind: str, resource_id: int) -> list[dict]:
    """Members with their assignment timestamp."""
    _require_parent(db, kind, resource_id)
    _, model, fk, _ = _KINDS[kind]
    stmt = (
        select(User.id, User.name, User.email, model.assigned_at)
        .join(model, model.user_id == User.id)
        .where(getattr(model, fk) == resource_id)
        .order_by(model.id)
    )
    return [dict(row._mapping) for row in db.execute(stmt)]


def replace_assignments(db: Session, kind: str, resource_id: int, user_ids: Iterable[int]) -> List[User]:
    _require_parent(db, kind, resource_id)
    _, model, fk, _ = _KINDS[kind]
    wanted = _dedupe(user_ids)

    if wanted:
        found = set(db.scalars(select(User.id).where(User.id.in_(wanted))))
        unknown = [uid for uid in wanted if uid not in found]
        if unknown:
            raise HTTPException(
                status_code=400,
                detail="Unknown user ids: " + ", ".join(str(u) for u in unknown),
            )

    now = utcnow()
    try:
        db.execute(delete(model).where(getattr(model, fk) == resource_id))
        db.flush()
        for uid in wanted:
            db.add(model(**{fk: resource_id, "user_id": uid, "assigned_at": now}))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("%s %s assignments replaced: %s", kind, resource_id, wanted)
    return get_assigned_users(db, kind, resource_id)


def replace_project_assignments(db: Session, project_id: int, user_ids: Iterable[int]) -> List[User]:
    return replace_assignments(db, "project", project_id, user_ids)


def replace_meeting_assignments(db: Session, meeting_id: int, user_ids: Iterable[int]) -> List[User]:
    return replace_assignments(db, "meeting", meeting_id, user_ids)
