from __future__ import annotations
from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.clock import utcnow
from core.database import Base


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        # a comment hangs off exactly one project or meeting
        CheckConstraint(
            "(project_id IS NULL) <> (meeting_id IS NULL)",
            name="ck_comment_single_parent",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    project_id: Mapped[int | None] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=True
    )
    meeting_id: Mapped[int | None] = mapped_column(
        ForeignKey("meetings.id", ondelete="CASCADE"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    author = relationship("User", lazy="joined")

    @property
    def user_name(self) -> str | None:
        return self.author.name if self.author else None

    @property
    def user_email(self) -> str | None:
        return self.author.email if self.author else None
