from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import enforce, require_admin
from authz.policy import Action, Resource, authorize
from user.schemas import UserSchema, UserCreate, UserUpdate
from user import service

user_router = APIRouter(
    prefix='/admin/users',
    tags=['Users'],
)

# List all users
@user_router.get('', response_model=list[UserSchema])
def user_list(db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.list, Resource.user))
    return service.get_users(db)

# Create a user
@user_router.post('', response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def user_post(payload: UserCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    enforce(authorize(admin, Action.create, Resource.user))
    return service.create_user(db, payload)

# Update a user (email, name, role)
@user_router.put('/{user_id}', response_model=UserSchema)
def user_update(user_id: int, payload: UserUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    db_user = service.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    state = service.admin_state(db, db_user, new_role=payload.role)
    enforce(authorize(admin, Action.update, Resource.user, owner_id=user_id, state=state))
    return service.update_user(db, user_id, payload)

# Delete a user
@user_router.delete('/{user_id}')
def user_delete(user_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    db_user = service.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    enforce(authorize(admin, Action.delete, Resource.user, owner_id=user_id, state=service.admin_state(db, db_user)))
    service.delete_user(db, db_user.id)
    return {"message": "User deleted successfully"}
