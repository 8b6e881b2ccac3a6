# Untargeted announcements are visible to everyone, targeted ones only to their targets.
from __future__ import annotations
from datetime import datetime
from typing import Iterable, Optional, List

from fastapi import HTTPException
from sqlalchemy import case, exists, or_, select
from sqlalchemy.orm import Session

from core.clock import as_utc, utcnow
from user.models import User
from .models import Announcement, AnnouncementTarget
from .schema import AnnouncementCreate, AnnouncementUpdate

PRIORITY_RANK = {"urgent": 1, "high": 2, "normal": 3}


def _priority_order():
    return case(PRIORITY_RANK, value=Announcement.priority, else_=len(PRIORITY_RANK) + 1)


def _not_expired(now: datetime):
    return or_(Announcement.expires_at.is_(None), Announcement.expires_at > now)


def _visible_to(user_id: int):
    any_target = select(AnnouncementTarget.id).where(AnnouncementTarget.announcement_id == Announcement.id)
    own_target = any_target.where(AnnouncementTarget.user_id == user_id)
    return or_(~exists(any_target), exists(own_target))


def get_announcement(db: Session, announcement_id: int) -> Announcement | None:
    return db.get(Announcement, announcement_id)


def get_announcements(
    db: Session,
    *,
    visible_to: Optional[int] = None,
    include_expired: bool = False,
    now: Optional[datetime] = None,
) -> List[Announcement]:
    """List announcements, most pressing first. `visible_to` limits the rows to what that user may see."""
    stmt = select(Announcement)
    if not include_expired:
        stmt = stmt.where(_not_expired(now or utcnow()))
    if visible_to is not None:
        stmt = stmt.where(_visible_to(visible_to))
    stmt = stmt.order_by(_priority_order(), Announcement.created_at.desc(), Announcement.id.desc())
    return list(db.scalars(stmt))


def is_visible(announcement: Announcement, user_id: int, now: Optional[datetime] = None) -> bool:
    expires_at = as_utc(announcement.expires_at)
    if expires_at is not None and expires_at <= (now or utcnow()):
        return False
    targets = announcement.target_user_ids
    return not targets or user_id in targets


def _check_targets(db: Session, user_ids: Iterable[int]) -> list[int]:
    wanted = list(dict.fromkeys(user_ids))
    if wanted:
        found = set(db.scalars(select(User.id).where(User.id.in_(wanted))))
        unknown = [uid for uid in wanted if uid not in found]
        if unknown:
            raise HTTPException(
                status_code=400,
                detail="Unknown user ids: " + ", ".join(str(u) for u in unknown),
            )
    return wanted


def create_announcement(db: Session, announcement: AnnouncementCreate) -> Announcement:
    targets = _check_targets(db, announcement.target_user_ids)
    row = Announcement(
        title=announcement.title,
        content=announcement.content,
        priority=announcement.priority,
        created_by=announcement.created_by,
        expires_at=as_utc(announcement.expires_at),
    )
    row.targets = [AnnouncementTarget(user_id=uid) for uid in targets]
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_announcement(db: Session, announcement_id: int, patch: AnnouncementUpdate) -> Announcement:
    row = db.get(Announcement, announcement_id)
    if not row:
        raise HTTPException(status_code=404, detail="Announcement not found")

    data = patch.model_dump(exclude_unset=True)
    target_ids = data.pop("target_user_ids", None)
    for key in ("title", "content", "priority"):
        if key in data and data[key] is None:
            data.pop(key)
    if "expires_at" in data:
        data["expires_at"] = as_utc(data["expires_at"])

    for k, v in data.items():
        setattr(row, k, v)
    if target_ids is not None:
        targets = _check_targets(db, target_ids)
        row.targets.clear()
        db.flush()
        row.targets.extend(AnnouncementTarget(user_id=uid) for uid in targets)

    db.commit()
    db.refresh(row)
    return row


def delete_announcement(db: Session, announcement_id: int) -> None:
    row = db.get(Announcement, announcement_id)
    if row:
        db.delete(row)
        db.commit()
    return
