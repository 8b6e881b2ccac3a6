from __future__ import annotations
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from meeting.models import Meeting
from project.models import Project
from .models import Comment
from .schema import CommentCreate, CommentUpdate


def get_comment(db: Session, comment_id: int) -> Comment | None:
    return db.get(Comment, comment_id)


def get_comments(
    db: Session,
    *,
    project_id: Optional[int] = None,
    meeting_id: Optional[int] = None,
) -> List[Comment]:
    if (project_id is None) == (meeting_id is None):
        raise HTTPException(status_code=400, detail="project_id or meeting_id is required")

    stmt = select(Comment)
    if project_id is not None:
        stmt = stmt.where(Comment.project_id == project_id)
    else:
        stmt = stmt.where(Comment.meeting_id == meeting_id)
    stmt = stmt.order_by(Comment.created_at.asc(), Comment.id.asc())
    return list(db.scalars(stmt))


def create_comment(db: Session, comment: CommentCreate) -> Comment:
    if comment.project_id is not None and db.get(Project, comment.project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")
    if comment.meeting_id is not None and db.get(Meeting, comment.meeting_id) is None:
        raise HTTPException(status_code=404, detail="Meeting not found")

    row = Comment(
        content=comment.content,
        user_id=comment.user_id,
        project_id=comment.project_id,
        meeting_id=comment.meeting_id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_comment(db: Session, comment_id: int, patch: CommentUpdate) -> Comment:
    row = db.get(Comment, comment_id)
    if not row:
        raise HTTPException(status_code=404, detail="Comment not found")
    row.content = patch.content
    db.commit()
    db.refresh(row)
    return row


def delete_comment(db: Session, comment_id: int) -> None:
    row = db.get(Comment, comment_id)
    if row:
        db.delete(row)
        db.commit()
    return
