from fastapi import Depends, HTTPException, status
from auth.services.auth_service import get_current_active_user
from authz.policy import Decision, DenyReason, is_admin
from user.models import User

DENY_STATUS = {
    DenyReason.not_authenticated: status.HTTP_401_UNAUTHORIZED,
    DenyReason.not_authorized: status.HTTP_403_FORBIDDEN,
    DenyReason.not_owner: status.HTTP_403_FORBIDDEN,
    DenyReason.invariant_violation: status.HTTP_400_BAD_REQUEST,
}


def enforce(decision: Decision) -> Decision:
    """Raise the HTTP error matching a deny decision; return allow decisions unchanged."""
    if decision.allowed:
        return decision
    code = DENY_STATUS.get(decision.reason, status.HTTP_403_FORBIDDEN)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    raise HTTPException(status_code=code, detail=decision.message, headers=headers)


def require_admin(user: User = Depends(get_current_active_user)) -> User:
    if not is_admin(user):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
