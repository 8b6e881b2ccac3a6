from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, Scope, authorize
from .schema import RequisitionSchema, RequisitionCreatePayload, RequisitionCreate, RequisitionStatusUpdate
from requisition import service

requisition_router = APIRouter(prefix="/requisitions", tags=["Requisitions"])


# Own requisitions, or all of them for admins
@requisition_router.get("", response_model=list[RequisitionSchema])
def list_requisitions(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    decision = enforce(authorize(user, Action.list, Resource.requisition))
    if decision.scope == Scope.own:
        return service.get_requisitions(db, user_id=user.id)
    return service.get_requisitions(db)


@requisition_router.get("/{requisition_id}", response_model=RequisitionSchema)
def get_requisition(requisition_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_requisition(db, requisition_id)
    # a missing requisition looks like someone else's to employees
    enforce(authorize(user, Action.read, Resource.requisition, owner_id=obj.user_id if obj else None))
    if not obj:
        raise HTTPException(status_code=404, detail="Requisition not found")
    return obj


@requisition_router.post("", response_model=RequisitionSchema, status_code=status.HTTP_201_CREATED)
def create_requisition(payload: RequisitionCreatePayload, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.create, Resource.requisition))
    internal = RequisitionCreate(user_id=user.id, **payload.model_dump())
    return service.create_requisition(db, internal)


# Approve / reject / process (admin only)
@requisition_router.put("/{requisition_id}/status", response_model=RequisitionSchema)
def update_requisition_status(
    requisition_id: int,
    payload: RequisitionStatusUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_active_user),
):
    enforce(authorize(user, Action.update, Resource.requisition))
    if not service.get_requisition(db, requisition_id):
        raise HTTPException(status_code=404, detail="Requisition not found")
    return service.set_status(db, requisition_id, payload, processed_by=user.id)


# Owners may withdraw pending requisitions; admins may delete any
@requisition_router.delete("/{requisition_id}")
def delete_requisition(requisition_id: int, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    obj = service.get_requisition(db, requisition_id)
    enforce(authorize(
        user, Action.delete, Resource.requisition,
        owner_id=obj.user_id if obj else None, state={"status": obj.status if obj else None},
    ))
    if not obj:
        raise HTTPException(status_code=404, detail="Requisition not found")
    service.delete_requisition(db, requisition_id)
    return {"message": "Requisition deleted successfully"}
