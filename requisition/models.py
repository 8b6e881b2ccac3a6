from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from sqlalchemy import CheckConstraint, Date, DateTime, Enum as SAEnum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.clock import utcnow
from core.database import Base


class RequisitionStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    processing = "processing"
    completed = "completed"


class PaymentRequisition(Base):
    __tablename__ = "payment_requisitions"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_requisition_amount_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="ZAR")
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[RequisitionStatus] = mapped_column(
        SAEnum(RequisitionStatus, name="requisition_status"),
        nullable=False,
        default=RequisitionStatus.pending,
        index=True,
    )
    priority: Mapped[str] = mapped_column(String(32), nullable=False, default="normal")
    requested_date: Mapped[date] = mapped_column(Date(), nullable=False)
    required_date: Mapped[date | None] = mapped_column(Date(), nullable=True)
    justification: Mapped[str | None] = mapped_column(Text(), nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    processed_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    requester = relationship("User", foreign_keys=[user_id], lazy="joined")
    processor = relationship("User", foreign_keys=[processed_by], lazy="joined")

    @property
    def user_name(self) -> str | None:
        return self.requester.name if self.requester else None

    @property
    def user_email(self) -> str | None:
        return self.requester.email if self.requester else None

    @property
    def processed_by_name(self) -> str | None:
        return self.processor.name if self.processor else None
