from __future__ import annotations
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.clock import utcnow
from core.database import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    # normal | high | urgent
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="normal")
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    creator = relationship("User", lazy="joined")
    targets: Mapped[list["AnnouncementTarget"]] = relationship(
        "AnnouncementTarget",
        back_populates="announcement",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="AnnouncementTarget.user_id",
    )

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    @property
    def target_user_ids(self) -> list[int]:
        return [t.user_id for t in self.targets]


class AnnouncementTarget(Base):
    """Restricts an announcement to specific users. No rows means everyone."""
    __tablename__ = "announcement_targets"
    __table_args__ = (UniqueConstraint("announcement_id", "user_id", name="uq_announcement_target"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    announcement_id: Mapped[int] = mapped_column(
        ForeignKey("announcements.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    announcement = relationship("Announcement", back_populates="targets")
