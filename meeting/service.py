from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.clock import as_utc, utcnow
from .models import Meeting
from .schema import MeetingCreate, MeetingUpdate

logger = logging.getLogger(__name__)


def get_meeting(db: Session, meeting_id: int) -> Meeting | None:
    return db.get(Meeting, meeting_id)


def get_meetings(db: Session, *, since: Optional[datetime] = None) -> List[Meeting]:
    stmt = select(Meeting)
    if since is not None:
        stmt = stmt.where(Meeting.meeting_date >= since)
    stmt = stmt.order_by(Meeting.meeting_date.asc(), Meeting.id.asc())
    return list(db.scalars(stmt))


def get_upcoming_meetings(db: Session, now: Optional[datetime] = None) -> List[Meeting]:
    return get_meetings(db, since=now or utcnow())


def create_meeting(db: Session, meeting: MeetingCreate) -> Meeting:
    row = Meeting(
        title=meeting.title,
        description=meeting.description,
        meeting_date=as_utc(meeting.meeting_date),
        location=meeting.location,
        created_by=meeting.created_by,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_meeting(db: Session, meeting_id: int, patch: MeetingUpdate) -> Meeting:
    row = db.get(Meeting, meeting_id)
    if not row:
        raise HTTPException(status_code=404, detail="Meeting not found")

    data = patch.model_dump(exclude_unset=True)
    if "meeting_date" in data:
        if data["meeting_date"] is None:
            raise HTTPException(status_code=400, detail="meeting_date cannot be empty")
        data["meeting_date"] = as_utc(data["meeting_date"])

    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    return row


def delete_meeting(db: Session, meeting_id: int) -> None:
    row = db.get(Meeting, meeting_id)
    if row:
        db.delete(row)
        db.commit()
        logger.info("deleted meeting %s", meeting_id)
    return
