from __future__ import annotations
import logging
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Project
from .schema import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def get_project(db: Session, project_id: int) -> Project | None:
    return db.get(Project, project_id)


def get_projects(db: Session, *, status: Optional[str] = None) -> List[Project]:
    stmt = select(Project)
    if status is not None:
        stmt = stmt.where(Project.status == status)
    stmt = stmt.order_by(Project.created_at.desc(), Project.id.desc())
    return list(db.scalars(stmt))


def get_current_projects(db: Session) -> List[Project]:
    return get_projects(db, status="current")


def get_upcoming_projects(db: Session) -> List[Project]:
    # undated projects go last
    stmt = (
        select(Project)
        .where(Project.status == "upcoming")
        .order_by(Project.start_date.is_(None), Project.start_date.asc(), Project.id.asc())
    )
    return list(db.scalars(stmt))


def create_project(db: Session, project: ProjectCreate) -> Project:
    row = Project(
        title=project.title,
        description=project.description,
        status=project.status or "upcoming",
        start_date=project.start_date,
        end_date=project.end_date,
        created_by=project.created_by,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_project(db: Session, project_id: int, patch: ProjectUpdate) -> Project:
    row = db.get(Project, project_id)
    if not row:
        raise HTTPException(status_code=404, detail="Project not found")

    data = patch.model_dump(exclude_unset=True)
    if data.get("status") is None:
        data.pop("status", None)

    new_start = data.get("start_date", row.start_date)
    new_end = data.get("end_date", row.end_date)
    if new_start and new_end and new_end < new_start:
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")

    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    return row


def delete_project(db: Session, project_id: int) -> None:
    row = db.get(Project, project_id)
    if row:
        db.delete(row)
        db.commit()
        logger.info("deleted project %s", project_id)
    return
