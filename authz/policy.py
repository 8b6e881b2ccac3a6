# Access rules for every resource. `authorize` is pure; routers pass in the row's owner and any
# state a rule needs, then hand the decision to `authz.deps.enforce`.
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional


class Action(str, Enum):
    create = "create"
    list = "list"
    read = "read"
    update = "update"
    delete = "delete"


class Resource(str, Enum):
    user = "user"
    project = "project"
    meeting = "meeting"
    comment = "comment"
    assignment = "assignment"
    announcement = "announcement"
    requisition = "requisition"
    task = "task"
    note = "note"
    reminder = "reminder"
    profile = "profile"


class Scope(str, Enum):
    all = "all"            # every row
    own = "own"            # rows owned by / assigned to the caller
    targeted = "targeted"  # untargeted rows plus rows targeted at the caller


class DenyReason(str, Enum):
    not_authenticated = "not_authenticated"
    not_authorized = "not_authorized"
    not_owner = "not_owner"
    invariant_violation = "invariant_violation"


@dataclass(frozen=True)
class Identity:
    id: int
    role: str


@dataclass(frozen=True)
class Decision:
    allowed: bool
    scope: Optional[Scope] = None
    fields: Optional[frozenset[str]] = None
    reason: Optional[DenyReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.allowed


def allow(scope: Scope = Scope.all, fields: Optional[set[str]] = None) -> Decision:
    return Decision(True, scope=scope, fields=frozenset(fields) if fields is not None else None)


def deny(reason: DenyReason, message: str) -> Decision:
    return Decision(False, reason=reason, message=message)


ADMIN_ONLY = "Admin access required"
NOT_OWNER = "Access denied"


def _val(v):
    return getattr(v, "value", v)


def _role(identity) -> str:
    return _val(getattr(identity, "role", None))


def is_admin(identity) -> bool:
    return identity is not None and _role(identity) == "admin"


def _is_owner(identity, owner_id: Optional[int]) -> bool:
    return owner_id is not None and owner_id == identity.id


# ---------- rules ----------
# Each rule receives (identity, action, owner_id, state) with identity known to be authenticated.

Rule = Callable[[Any, Action, Optional[int], Mapping[str, Any]], Decision]


def _admin(identity, action, owner_id, state) -> Decision:
    return allow() if is_admin(identity) else deny(DenyReason.not_authorized, ADMIN_ONLY)


def _user(identity, action, owner_id, state) -> Decision:
    if action == Action.read and _is_owner(identity, owner_id):
        return allow(Scope.own)
    if not is_admin(identity):
        # self edits of personal data go through the profile resource
        return deny(DenyReason.not_authorized, ADMIN_ONLY)

    target_role = _val(state.get("target_role"))
    admin_count = state.get("admin_count")
    sole_admin = target_role == "admin" and admin_count is not None and admin_count <= 1
    if action == Action.delete and sole_admin:
        return deny(DenyReason.invariant_violation, "Cannot delete the last admin user")
    if action == Action.update and sole_admin:
        new_role = _val(state.get("new_role"))
        if new_role is not None and new_role != "admin":
            return deny(DenyReason.invariant_violation, "Cannot remove the last admin user")
    return allow()


def _shared_record(identity, action, owner_id, state) -> Decision:
    # projects and meetings: admins create/delete, every signed-in user reads and edits
    if action in (Action.create, Action.delete):
        return _admin(identity, action, owner_id, state)
    return allow()


def _comment(identity, action, owner_id, state) -> Decision:
    if action in (Action.update, Action.delete):
        if not _is_owner(identity, owner_id):
            return deny(DenyReason.not_owner, f"Not authorized to {action.value} this comment")
    return allow()


def _announcement(identity, action, owner_id, state) -> Decision:
    if action in (Action.list, Action.read):
        return allow(Scope.all if is_admin(identity) else Scope.targeted)
    return _admin(identity, action, owner_id, state)


def _requisition(identity, action, owner_id, state) -> Decision:
    if action == Action.create:
        return allow(Scope.own)
    if action == Action.list:
        return allow(Scope.all if is_admin(identity) else Scope.own)
    if action == Action.update:
        return _admin(identity, action, owner_id, state)
    if is_admin(identity):
        return allow()
    if not _is_owner(identity, owner_id):
        return deny(DenyReason.not_owner, NOT_OWNER)
    if action == Action.delete and _val(state.get("status")) != "pending":
        return deny(DenyReason.invariant_violation, "Can only delete pending requisitions")
    return allow(Scope.own)


TASK_SELF_FIELDS = {"status"}


def _task(identity, action, owner_id, state) -> Decision:
    if action in (Action.create, Action.delete):
        return _admin(identity, action, owner_id, state)
    if action == Action.list:
        return allow(Scope.all if is_admin(identity) else Scope.own)
    if is_admin(identity):
        return allow()
    if not _is_owner(identity, owner_id):
        return deny(DenyReason.not_owner, NOT_OWNER)
    if action == Action.update:
        return allow(Scope.own, fields=TASK_SELF_FIELDS)
    return allow(Scope.own)


def _personal(identity, action, owner_id, state) -> Decision:
    # notes and reminders: strictly private, no admin override
    if action in (Action.create, Action.list):
        return allow(Scope.own)
    if not _is_owner(identity, owner_id):
        return deny(DenyReason.not_owner, "Unauthorized")
    return allow(Scope.own)


def _profile(identity, action, owner_id, state) -> Decision:
    if action == Action.list:
        return _admin(identity, action, owner_id, state)
    if action == Action.delete:
        return deny(DenyReason.not_authorized, "Profiles are removed together with their user")
    if not _is_owner(identity, owner_id):
        return deny(DenyReason.not_owner, NOT_OWNER)
    return allow(Scope.own)


RULES: dict[Resource, Rule] = {
    Resource.user: _user,
    Resource.project: _shared_record,
    Resource.meeting: _shared_record,
    Resource.comment: _comment,
    Resource.assignment: _admin,
    Resource.announcement: _announcement,
    Resource.requisition: _requisition,
    Resource.task: _task,
    Resource.note: _personal,
    Resource.reminder: _personal,
    Resource.profile: _profile,
}


def authorize(
    identity,
    action: Action,
    resource: Resource,
    *,
    owner_id: Optional[int] = None,
    state: Optional[Mapping[str, Any]] = None,
) -> Decision:
    if identity is None or getattr(identity, "id", None) is None:
        return deny(DenyReason.not_authenticated, "Not authenticated")
    return RULES[resource](identity, action, owner_id, state or {})
