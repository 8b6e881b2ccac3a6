# Token issuing and request authentication.
from __future__ import annotations
import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.orm import Session

from authz.policy import Identity
from auth.utils.auth_utils import verify_password
from core.clock import utcnow
from core.config_loader import Settings
from core.database import get_db
from user.models import User

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Token or credentials could not be validated."""


class SessionIssuer:
    """Signs and validates bearer tokens carrying the user id and role."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        if not secret_key:
            raise ValueError("secret_key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionIssuer":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, user) -> str:
        role = getattr(user.role, "value", user.role)
        claims = {
            "sub": str(user.id),
            "role": role,
            "exp": utcnow() + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def authenticate(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthenticationError("invalid token") from e

        sub = payload.get("sub")
        role = payload.get("role")
        if sub is None or role is None:
            raise AuthenticationError("token is missing claims")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise AuthenticationError("token subject is not a user id") from e
        return Identity(id=user_id, role=role)

    def login(self, db: Session, email: str, password: str) -> tuple[str, User]:
        user = db.scalars(select(User).where(User.email == email)).first()
        # verify even when the user is unknown so both failures look the same
        if not verify_password(password, user.password_hash if user else None) or user is None:
            logger.info("failed login for %s", email)
            raise AuthenticationError("Invalid email or password")
        return self.issue(user), user


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_active_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _credentials_exception()
    try:
        identity = issuer.authenticate(credentials.credentials)
    except AuthenticationError:
        raise _credentials_exception()

    user = db.get(User, identity.id)
    if user is None:
        raise _credentials_exception()
    return user
