from __future__ import annotations
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.clock import utcnow
from .models import PersonalNote
from .schema import NoteCreatePayload, NoteUpdate


def get_note(db: Session, note_id: int) -> PersonalNote | None:
    return db.get(PersonalNote, note_id)


def get_notes(db: Session, *, user_id: int) -> List[PersonalNote]:
    stmt = (
        select(PersonalNote)
        .where(PersonalNote.user_id == user_id)
        .order_by(PersonalNote.updated_at.desc(), PersonalNote.id.desc())
    )
    return list(db.scalars(stmt))


def create_note(db: Session, user_id: int, note: NoteCreatePayload) -> PersonalNote:
    row = PersonalNote(
        user_id=user_id,
        title=note.title,
        content=note.content,
        color=note.color or "default",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_note(db: Session, note_id: int, patch: NoteUpdate) -> PersonalNote:
    row = db.get(PersonalNote, note_id)
    if not row:
        raise HTTPException(status_code=404, detail="Note not found")

    data = patch.model_dump(exclude_unset=True)
    for key in ("content", "color"):
        if key in data and data[key] is None:
            data.pop(key)
    for k, v in data.items():
        setattr(row, k, v)
    # bump even when nothing changed so the note floats to the top
    row.updated_at = utcnow()
    db.commit()
    db.refresh(row)
    return row


def delete_note(db: Session, note_id: int) -> None:
    row = db.get(PersonalNote, note_id)
    if row:
        db.delete(row)
        db.commit()
    return
