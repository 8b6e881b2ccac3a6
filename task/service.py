from __future__ import annotations
from typing import AbstractSet, Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.clock import utcnow
from user.models import User
from .models import Task, TaskStatus
from .schema import TaskCreate, TaskUpdate

# columns that may not be cleared by an update
_REQUIRED = {"title", "status", "priority", "assigned_to"}


def get_task(db: Session, task_id: int) -> Task | None:
    return db.get(Task, task_id)


def get_tasks(db: Session, *, assigned_to: Optional[int] = None) -> List[Task]:
    stmt = select(Task)
    if assigned_to is not None:
        stmt = stmt.where(Task.assigned_to == assigned_to)
    stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
    return list(db.scalars(stmt))


def _require_user(db: Session, user_id: int) -> None:
    if db.get(User, user_id) is None:
        raise HTTPException(status_code=400, detail="Assigned user not found")


def create_task(db: Session, task: TaskCreate) -> Task:
    _require_user(db, task.assigned_to)
    row = Task(
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        assigned_to=task.assigned_to,
        created_by=task.created_by,
        due_date=task.due_date,
        completed_at=utcnow() if task.status == TaskStatus.completed else None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_task(
    db: Session,
    task_id: int,
    patch: TaskUpdate,
    *,
    fields: Optional[AbstractSet[str]] = None,
) -> Task:
    """Apply an update. `fields`, when given, limits which attributes are written; the rest are dropped."""
    row = db.get(Task, task_id)
    if not row:
        raise HTTPException(status_code=404, detail="Task not found")

    data = patch.model_dump(exclude_unset=True)
    if fields is not None:
        data = {k: v for k, v in data.items() if k in fields}
    data = {k: v for k, v in data.items() if not (k in _REQUIRED and v is None)}

    if "assigned_to" in data and data["assigned_to"] != row.assigned_to:
        _require_user(db, data["assigned_to"])

    was_completed = row.status == TaskStatus.completed
    for k, v in data.items():
        setattr(row, k, v)

    if row.status == TaskStatus.completed:
        if not was_completed or row.completed_at is None:
            row.completed_at = utcnow()
    else:
        row.completed_at = None

    db.commit()
    db.refresh(row)
    return row


def delete_task(db: Session, task_id: int) -> None:
    row = db.get(Task, task_id)
    if row:
        db.delete(row)
        db.commit()
    return
