from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import enforce, require_admin
from authz.policy import Action, Resource, authorize
from .schema import AssignedUserSchema, AssignPayload, AssignResponse
from . import service

assignment_router = APIRouter(prefix="/admin", tags=["Assignments"])


# Replace the members of a project (admin only)
@assignment_router.post("/projects/{project_id}/assign", response_model=AssignResponse)
def assign_project(project_id: int, payload: AssignPayload, db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.update, Resource.assignment))
    users = service.replace_project_assignments(db, project_id, payload.user_ids)
    return {"assigned_users": users}


@assignment_router.get("/projects/{project_id}/assignments", response_model=list[AssignedUserSchema])
def project_assignments(project_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.list, Resource.assignment))
    return service.get_assignments(db, "project", project_id)


# Replace the members of a meeting (admin only)
@assignment_router.post("/meetings/{meeting_id}/assign", response_model=AssignResponse)
def assign_meeting(meeting_id: int, payload: AssignPayload, db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.update, Resource.assignment))
    users = service.replace_meeting_assignments(db, meeting_id, payload.user_ids)
    return {"assigned_users": users}


@assignment_router.get("/meetings/{meeting_id}/assignments", response_model=list[AssignedUserSchema])
def meeting_assignments(meeting_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.list, Resource.assignment))
    return service.get_assignments(db, "meeting", meeting_id)
