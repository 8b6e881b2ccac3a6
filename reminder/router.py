from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import ReminderSchema, ReminderCreatePayload, ReminderUpdate
from reminder import service

reminder_router = APIRouter(prefix="/reminders", tags=["Reminders"])


def _owned_reminder(db: Session, reminder_id: int, user, action: Action):
    obj = service.get_reminder(db, reminder_id)
    enforce(authorize(user, action, Resource.reminder, owner_id=obj.user_id if obj else None))
    return obj


@reminder_router.get("", response_model=list[ReminderSchema])
def list_reminders(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.reminder))
    return service.get_reminders(db, user_id=user.id)


@reminder_router.post("", response_model=ReminderSchema, status_code=status.HTTP_201_CREATED)
def create_reminder(payload: ReminderCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.reminder))
    return service.create_reminder(db, user.id, payload)


@reminder_router.put("/{reminder_id}", response_model=ReminderSchema)
def update_reminder(reminder_id: int, payload: ReminderUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    _owned_reminder(db, reminder_id, user, Action.update)
    return service.update_reminder(db, reminder_id, payload)


@reminder_router.delete("/{reminder_id}")
def delete_reminder(reminder_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    _owned_reminder(db, reminder_id, user, Action.delete)
    service.delete_reminder(db, reminder_id)
    return {"message": "Reminder deleted successfully"}
