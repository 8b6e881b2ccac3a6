from __future__ import annotations
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.clock import as_utc
from .models import Reminder
from .schema import ReminderCreatePayload, ReminderUpdate

# columns that may not be cleared by an update
_REQUIRED = {"title", "reminder_date", "priority", "is_completed"}


def get_reminder(db: Session, reminder_id: int) -> Reminder | None:
    return db.get(Reminder, reminder_id)


def get_reminders(db: Session, *, user_id: int) -> List[Reminder]:
    # open reminders first, then soonest due
    stmt = (
        select(Reminder)
        .where(Reminder.user_id == user_id)
        .order_by(Reminder.is_completed.asc(), Reminder.reminder_date.asc(), Reminder.id.asc())
    )
    return list(db.scalars(stmt))


def create_reminder(db: Session, user_id: int, reminder: ReminderCreatePayload) -> Reminder:
    row = Reminder(
        user_id=user_id,
        title=reminder.title,
        description=reminder.description,
        reminder_date=as_utc(reminder.reminder_date),
        priority=reminder.priority or "normal",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_reminder(db: Session, reminder_id: int, patch: ReminderUpdate) -> Reminder:
    row = db.get(Reminder, reminder_id)
    if not row:
        raise HTTPException(status_code=404, detail="Reminder not found")

    data = patch.model_dump(exclude_unset=True)
    data = {k: v for k, v in data.items() if not (k in _REQUIRED and v is None)}
    if "reminder_date" in data:
        data["reminder_date"] = as_utc(data["reminder_date"])
    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    return row


def delete_reminder(db: Session, reminder_id: int) -> None:
    row = db.get(Reminder, reminder_id)
    if row:
        db.delete(row)
        db.commit()
    return
