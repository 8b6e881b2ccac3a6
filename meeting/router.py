from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import MeetingSchema, MeetingCreatePayload, MeetingCreate, MeetingUpdate
from meeting import service

meeting_router = APIRouter(prefix="/meetings", tags=["Meetings"])


@meeting_router.get("", response_model=list[MeetingSchema])
def list_meetings(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.meeting))
    return service.get_meetings(db)


@meeting_router.get("/upcoming", response_model=list[MeetingSchema])
def list_upcoming_meetings(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.meeting))
    return service.get_upcoming_meetings(db)


@meeting_router.get("/{meeting_id}", response_model=MeetingSchema)
def get_meeting(meeting_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.read, Resource.meeting))
    obj = service.get_meeting(db, meeting_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return obj


# Create meeting (admin only)
@meeting_router.post("", response_model=MeetingSchema, status_code=status.HTTP_201_CREATED)
def create_meeting(payload: MeetingCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.meeting))
    internal = MeetingCreate(created_by=user.id, **payload.model_dump())
    return service.create_meeting(db, internal)


@meeting_router.put("/{meeting_id}", response_model=MeetingSchema)
def update_meeting(meeting_id: int, payload: MeetingUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.update, Resource.meeting))
    if not service.get_meeting(db, meeting_id):
        raise HTTPException(status_code=404, detail="Meeting not found")
    return service.update_meeting(db, meeting_id, payload)


@meeting_router.delete("/{meeting_id}")
def delete_meeting(meeting_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.delete, Resource.meeting))
    if not service.get_meeting(db, meeting_id):
        raise HTTPException(status_code=404, detail="Meeting not found")
    service.delete_meeting(db, meeting_id)
    return {"message": "Meeting deleted successfully"}
