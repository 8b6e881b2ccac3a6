from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import enforce
from authz.policy import Action, Resource, authorize
from .schema import ProfileUpsert, ProfileView
from . import service

profile_router = APIRouter(prefix="/profile", tags=["Profiles"])

# Own profile (user fields merged with profile fields)
@profile_router.get("/me", response_model=ProfileView)
def my_profile(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.read, Resource.profile, owner_id=user.id))
    return service.get_profile_view(db, user)

# Create or update own profile
@profile_router.post("/me", response_model=ProfileView)
def save_my_profile(payload: ProfileUpsert, db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.update, Resource.profile, owner_id=user.id))
    return service.upsert_profile(db, user, payload)

# Every employee's profile (admin, read-only)
@profile_router.get("/all", response_model=list[ProfileView])
def all_profiles(db: Session = Depends(get_db), user=Depends(get_current_active_user)):
    enforce(authorize(user, Action.list, Resource.profile))
    return service.list_profile_views(db)
