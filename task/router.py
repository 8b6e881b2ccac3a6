from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, Scope, authorize
from .schema import TaskSchema, TaskCreatePayload, TaskCreate, TaskUpdate
from task import service

task_router = APIRouter(prefix="/tasks", tags=["Tasks"])


# Admins see every task, employees only the ones assigned to them
@task_router.get("", response_model=list[TaskSchema])
def list_tasks(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    decision = enforce(authorize(user, Action.list, Resource.task))
    if decision.scope == Scope.own:
        return service.get_tasks(db, assigned_to=user.id)
    return service.get_tasks(db)


@task_router.get("/{task_id}", response_model=TaskSchema)
def get_task(task_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_task(db, task_id)
    # a missing task looks like someone else's to employees
    enforce(authorize(user, Action.read, Resource.task, owner_id=obj.assigned_to if obj else None))
    if not obj:
        raise HTTPException(status_code=404, detail="Task not found")
    return obj


# Create task (admin only)
@task_router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.task))
    internal = TaskCreate(created_by=user.id, **payload.model_dump())
    return service.create_task(db, internal)


@task_router.put("/{task_id}", response_model=TaskSchema)
def update_task(task_id: int, payload: TaskUpdate, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_task(db, task_id)
    decision = enforce(authorize(user, Action.update, Resource.task, owner_id=obj.assigned_to if obj else None))
    if not obj:
        raise HTTPException(status_code=404, detail="Task not found")
    return service.update_task(db, task_id, payload, fields=decision.fields)


# Delete task (admin only)
@task_router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.delete, Resource.task))
    if not service.get_task(db, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    service.delete_task(db, task_id)
    return {"message": "Task deleted successfully"}
