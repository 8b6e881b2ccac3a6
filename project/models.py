from __future__ import annotations
from typing import TYPE_CHECKING
from datetime import date, datetime
from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.clock import utcnow
from core.database import Base

if TYPE_CHECKING:
    from user.models import User
    from assignment.models import ProjectAssignment


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    # upcoming | current | completed
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="upcoming", index=True)
    start_date: Mapped[date | None] = mapped_column(Date(), nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date(), nullable=True)

    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # relationships
    creator: Mapped["User | None"] = relationship("User", lazy="joined")
    assignments: Mapped[list["ProjectAssignment"]] = relationship(
        "ProjectAssignment",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ProjectAssignment.id",
    )

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    @property
    def assigned_users(self) -> list["User"]:
        return [a.user for a in self.assignments if a.user is not None]

Index("ix_projects_status_start", Project.status, Project.start_date)
