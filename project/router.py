from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import ProjectSchema, ProjectCreatePayload, ProjectCreate, ProjectUpdate
from project import service

project_router = APIRouter(prefix="/projects", tags=["Projects"])


@project_router.get("", response_model=list[ProjectSchema])
def list_projects(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.project))
    return service.get_projects(db)


@project_router.get("/current", response_model=list[ProjectSchema])
def list_current_projects(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.project))
    return service.get_current_projects(db)


@project_router.get("/upcoming", response_model=list[ProjectSchema])
def list_upcoming_projects(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.project))
    return service.get_upcoming_projects(db)


@project_router.get("/{project_id}", response_model=ProjectSchema)
def get_project(project_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.read, Resource.project))
    obj = service.get_project(db, project_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Project not found")
    return obj


# Create project (admin only)
@project_router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.project))
    internal = ProjectCreate(created_by=user.id, **payload.model_dump())
    return service.create_project(db, internal)


# Any signed-in user may edit status and details
@project_router.put("/{project_id}", response_model=ProjectSchema)
def update_project(project_id: int, payload: ProjectUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.update, Resource.project))
    if not service.get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return service.update_project(db, project_id, payload)


@project_router.delete("/{project_id}")
def delete_project(project_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.delete, Resource.project))
    if not service.get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    service.delete_project(db, project_id)
    return {"message": "Project deleted successfully"}
