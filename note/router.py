from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import NoteSchema, NoteCreatePayload, NoteUpdate
from note import service

note_router = APIRouter(prefix="/notes", tags=["Notes"])


def _owned_note(db: Session, note_id: int, user, action: Action):
    # missing and foreign notes get the same 403
    obj = service.get_note(db, note_id)
    enforce(authorize(user, action, Resource.note, owner_id=obj.user_id if obj else None))
    return obj


@note_router.get("", response_model=list[NoteSchema])
def list_notes(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.note))
    return service.get_notes(db, user_id=user.id)


@note_router.post("", response_model=NoteSchema, status_code=status.HTTP_201_CREATED)
def create_note(payload: NoteCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.note))
    return service.create_note(db, user.id, payload)


@note_router.put("/{note_id}", response_model=NoteSchema)
def update_note(note_id: int, payload: NoteUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    _owned_note(db, note_id, user, Action.update)
    return service.update_note(db, note_id, payload)


@note_router.delete("/{note_id}")
def delete_note(note_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    _owned_note(db, note_id, user, Action.delete)
    service.delete_note(db, note_id)
    return {"message": "Note deleted successfully"}
