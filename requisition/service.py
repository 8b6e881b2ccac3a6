from __future__ import annotations
import logging
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.clock import utcnow
from .models import PaymentRequisition
from .schema import RequisitionCreate, RequisitionStatusUpdate

logger = logging.getLogger(__name__)


def get_requisition(db: Session, requisition_id: int) -> PaymentRequisition | None:
    return db.get(PaymentRequisition, requisition_id)


def get_requisitions(db: Session, *, user_id: Optional[int] = None) -> List[PaymentRequisition]:
    stmt = select(PaymentRequisition)
    if user_id is not None:
        stmt = stmt.where(PaymentRequisition.user_id == user_id)
    stmt = stmt.order_by(PaymentRequisition.created_at.desc(), PaymentRequisition.id.desc())
    return list(db.scalars(stmt))


def create_requisition(db: Session, requisition: RequisitionCreate) -> PaymentRequisition:
    row = PaymentRequisition(**requisition.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def set_status(
    db: Session,
    requisition_id: int,
    patch: RequisitionStatusUpdate,
    *,
    processed_by: int,
) -> PaymentRequisition:
    """Record an admin decision. Any status may move to any other; notes are replaced, not merged."""
    row = db.get(PaymentRequisition, requisition_id)
    if not row:
        raise HTTPException(status_code=404, detail="Requisition not found")

    old_status = row.status
    row.status = patch.status
    row.admin_notes = patch.admin_notes or None
    row.processed_by = processed_by
    row.processed_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info(
        "requisition %s status %s -> %s by user %s",
        requisition_id, old_status.value, row.status.value, processed_by,
    )
    return row


def delete_requisition(db: Session, requisition_id: int) -> None:
    row = db.get(PaymentRequisition, requisition_id)
    if row:
        db.delete(row)
        db.commit()
    return
