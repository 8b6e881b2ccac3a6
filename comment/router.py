from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import CommentSchema, CommentCreatePayload, CommentCreate, CommentUpdate
from comment import service

comment_router = APIRouter(prefix="/comments", tags=["Comments"])


# Comments for one project or one meeting, oldest first
@comment_router.get("", response_model=list[CommentSchema])
def list_comments(
    project_id: Optional[int] = Query(None),
    meeting_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
):
    enforce(authorize(user, Action.list, Resource.comment))
    return service.get_comments(db, project_id=project_id, meeting_id=meeting_id)


@comment_router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_comment(payload: CommentCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.comment))
    internal = CommentCreate(user_id=user.id, **payload.model_dump())
    return service.create_comment(db, internal)


# Author only; missing and foreign comments get the same 403
@comment_router.put("/{comment_id}", response_model=CommentSchema)
def update_comment(comment_id: int, payload: CommentUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_comment(db, comment_id)
    enforce(authorize(user, Action.update, Resource.comment, owner_id=obj.user_id if obj else None))
    return service.update_comment(db, comment_id, payload)


# Author only
@comment_router.delete("/{comment_id}")
def delete_comment(comment_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_comment(db, comment_id)
    enforce(authorize(user, Action.delete, Resource.comment, owner_id=obj.user_id if obj else None))
    service.delete_comment(db, comment_id)
    return {"message": "Comment deleted successfully"}
