"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CommunityId, SessionId, ProjectId, VoteId wrap ints — never use bare int in domain logic
    - All valid roles and states encoded as Enums — no raw string matching
    - Identity is immutable once resolved from the auth token

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders; values match the DB `tipo` column
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
CommunityId = NewType("CommunityId", int)
SessionId = NewType("SessionId", int)
ProjectId = NewType("ProjectId", int)
VoteId = NewType("VoteId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """User roles — maps to DB `tipo` column."""
    ADMIN = "ADMIN"
    GESTOR = "GESTOR"
    PARTICIPANTE = "PARTICIPANTE"


class SessionStatus(str, Enum):
    """Derived session lifecycle states (never persisted)."""
    INATIVA = "inativa"
    AGENDADA = "agendada"
    EM_ANDAMENTO = "em_andamento"
    ENCERRADA = "encerrada"


# ─── Request Identity ────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Authenticated caller — resolved once per request, passed explicitly."""
    user_id: UserId
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
