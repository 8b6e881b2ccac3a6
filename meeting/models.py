from __future__ import annotations
from typing import TYPE_CHECKING
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.clock import utcnow
from core.database import Base

if TYPE_CHECKING:
    from user.models import User
    from assignment.models import MeetingAssignment


class Meeting(Base):
    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    meeting_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    creator: Mapped["User | None"] = relationship("User", lazy="joined")
    assignments: Mapped[list["MeetingAssignment"]] = relationship(
        "MeetingAssignment",
        back_populates="meeting",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="MeetingAssignment.id",
    )

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    @property
    def assigned_users(self) -> list["User"]:
        return [a.user for a in self.assignments if a.user is not None]
