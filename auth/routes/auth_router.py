from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.registration import register_user
from auth.schemas import LoginPayload, RegisterPayload, TokenResponse
from auth.services.auth_service import (
    AuthenticationError,
    SessionIssuer,
    get_current_active_user,
    get_session_issuer,
)
from user.models import User
from user.schemas import UserSchema

auth_router = APIRouter(prefix="/auth", tags=["Auth"])

# Exchange email + password for a bearer token
@auth_router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginPayload,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
    ):
    try:
        token, user = issuer.login(db, str(payload.email), payload.password)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"token": token, "user": user}

# Self-service sign up, optionally with the full employee profile
@auth_router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterPayload,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
    ):
    user = register_user(db, payload)
    return {"token": issuer.issue(user), "user": user}

# Current user
@auth_router.get("/me", response_model=UserSchema)
def me(current_user: User = Depends(get_current_active_user)):
    return current_user
