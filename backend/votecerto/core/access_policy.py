"""Access Policy — single role → capability/scope table consumed by every query and command.

Invariants:
    - ROLE_CAPABILITIES is the only place that branches on role for permissions
    - RECORD_SCOPES is the only place that decides which rows a role may see
    - Ownership checks (creator-or-admin) go through can_manage(), never ad hoc comparisons
    - All functions are PURE: no IO, no async, no DB

Design Decisions:
    - Role -> capability mapping as a frozen dict (same shape as a classic RBAC permission table)
    - Scopes as enums instead of SQL here: services/query_filters.py turns a scope into a WHERE clause,
      keeping core free of SQLAlchemy
"""

from enum import Enum

from votecerto.core.domain_types import Identity, UserId, UserRole
from votecerto.core.errors import AuthorizationError


class Capability(str, Enum):
    """Actions gated by role (ownership checked separately)."""
    CAST_VOTE = "cast_vote"
    CREATE_COMMUNITY = "create_community"
    CREATE_SESSION = "create_session"
    CREATE_GLOBAL_SESSION = "create_global_session"
    MANAGE_PROJECTS = "manage_projects"
    VIEW_REPORTS = "view_reports"
    MANAGE_USERS = "manage_users"
    BYPASS_OWNERSHIP = "bypass_ownership"


class RecordScope(str, Enum):
    """Which rows of a resource a role may see."""
    ALL = "all"
    MANAGED = "managed"        # created by the caller or inside communities they created
    MEMBERSHIP = "membership"  # inside communities the caller belongs to
    OWN = "own"                # rows authored by the caller


class Resource(str, Enum):
    SESSION = "session"
    PROJECT = "project"
    VOTE = "vote"
    COMMUNITY = "community"


ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMIN: frozenset({
        Capability.CREATE_COMMUNITY,
        Capability.CREATE_SESSION,
        Capability.CREATE_GLOBAL_SESSION,
        Capability.MANAGE_PROJECTS,
        Capability.VIEW_REPORTS,
        Capability.MANAGE_USERS,
        Capability.BYPASS_OWNERSHIP,
    }),
    UserRole.GESTOR: frozenset({
        Capability.CREATE_COMMUNITY,
        Capability.CREATE_SESSION,
        Capability.MANAGE_PROJECTS,
        Capability.VIEW_REPORTS,
    }),
    UserRole.PARTICIPANTE: frozenset({
        Capability.CAST_VOTE,
    }),
}

RECORD_SCOPES: dict[UserRole, dict[Resource, RecordScope]] = {
    UserRole.ADMIN: {
        Resource.SESSION: RecordScope.ALL,
        Resource.PROJECT: RecordScope.ALL,
        Resource.VOTE: RecordScope.ALL,
        Resource.COMMUNITY: RecordScope.ALL,
    },
    UserRole.GESTOR: {
        Resource.SESSION: RecordScope.MANAGED,
        Resource.PROJECT: RecordScope.MANAGED,
        Resource.VOTE: RecordScope.MANAGED,
        Resource.COMMUNITY: RecordScope.MANAGED,
    },
    UserRole.PARTICIPANTE: {
        Resource.SESSION: RecordScope.MEMBERSHIP,
        Resource.PROJECT: RecordScope.MEMBERSHIP,
        Resource.VOTE: RecordScope.OWN,
        Resource.COMMUNITY: RecordScope.MEMBERSHIP,
    },
}


def capabilities_for(role: UserRole) -> frozenset[Capability]:
    """Capability set for a role (empty for unknown roles)."""
    return ROLE_CAPABILITIES.get(role, frozenset())


def has_capability(identity: Identity, capability: Capability) -> bool:
    return capability in capabilities_for(identity.role)


def require_capability(
    identity: Identity, capability: Capability, message: str,
) -> None:
    """Raise AuthorizationError with message unless the role has capability."""
    if not has_capability(identity, capability):
        raise AuthorizationError(message)


def scope_for(identity: Identity, resource: Resource) -> RecordScope:
    return RECORD_SCOPES[identity.role][resource]


def can_manage(identity: Identity, owner_id: UserId | int | None) -> bool:
    """Creator-or-admin rule shared by communities and sessions."""
    if has_capability(identity, Capability.BYPASS_OWNERSHIP):
        return True
    return owner_id is not None and owner_id == identity.user_id


def require_manage(
    identity: Identity, owner_id: UserId | int | None, message: str,
) -> None:
    if not can_manage(identity, owner_id):
        raise AuthorizationError(message)
