from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, Scope, authorize
from .schema import AnnouncementSchema, AnnouncementCreatePayload, AnnouncementCreate, AnnouncementUpdate
from announcement import service

announcement_router = APIRouter(prefix="/announcements", tags=["Announcements"])


@announcement_router.get("", response_model=list[AnnouncementSchema])
def list_announcements(
    include_expired: bool = Query(False, description="Admins only: also return expired announcements"),
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
):
    decision = enforce(authorize(user, Action.list, Resource.announcement))
    if decision.scope == Scope.targeted:
        return service.get_announcements(db, visible_to=user.id)
    return service.get_announcements(db, include_expired=include_expired)


@announcement_router.get("/{announcement_id}", response_model=AnnouncementSchema)
def get_announcement(announcement_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    decision = enforce(authorize(user, Action.read, Resource.announcement))
    obj = service.get_announcement(db, announcement_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Announcement not found")
    # hidden announcements look the same as missing ones
    if decision.scope == Scope.targeted and not service.is_visible(obj, user.id):
        raise HTTPException(status_code=404, detail="Announcement not found")
    return obj


# Create announcement (admin only)
@announcement_router.post("", response_model=AnnouncementSchema, status_code=status.HTTP_201_CREATED)
def create_announcement(payload: AnnouncementCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.announcement))
    internal = AnnouncementCreate(created_by=user.id, **payload.model_dump())
    return service.create_announcement(db, internal)


# Update announcement (admin only)
@announcement_router.put("/{announcement_id}", response_model=AnnouncementSchema)
def update_announcement(announcement_id: int, payload: AnnouncementUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.update, Resource.announcement))
    if not service.get_announcement(db, announcement_id):
        raise HTTPException(status_code=404, detail="Announcement not found")
    return service.update_announcement(db, announcement_id, payload)


# Delete announcement (admin only)
@announcement_router.delete("/{announcement_id}")
def delete_announcement(announcement_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.delete, Resource.announcement))
    if not service.get_announcement(db, announcement_id):
        raise HTTPException(status_code=404, detail="Announcement not found")
    service.delete_announcement(db, announcement_id)
    return {"message": "Announcement deleted successfully"}
