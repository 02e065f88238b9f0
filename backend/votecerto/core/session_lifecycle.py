"""Session Lifecycle — pure rules for voting-session time windows and edit rights.

Invariants:
    - "Live" = ativa AND data_inicio <= now <= data_fim (both bounds inclusive)
    - Naive datetimes are interpreted as UTC (SQLite drops tzinfo on read)
    - data_fim >= data_inicio on create and update
    - All functions are PURE: no IO, no async, no DB; `now` is always injected

Design Decisions:
    - Derived status computed on read, never persisted: the flag and the window are the source of truth
    - check_* functions raise typed errors (first violation wins), mirroring gate enforcement
"""

from datetime import datetime, timezone

from votecerto.core.access_policy import (
    Capability, has_capability, require_capability, require_manage,
)
from votecerto.core.domain_types import Identity, SessionStatus
from votecerto.core.errors import (
    AuthorizationError, InputValidationError, ResourceNotFoundError,
)
from votecerto.core.repository_protocols import CommunityLike, VotingSessionLike


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_session_live(session: VotingSessionLike, now: datetime) -> bool:
    if not session.ativa:
        return False
    now = as_utc(now)
    return as_utc(session.data_inicio) <= now <= as_utc(session.data_fim)


def session_status(session: VotingSessionLike, now: datetime) -> SessionStatus:
    """Derived lifecycle state for display."""
    if not session.ativa:
        return SessionStatus.INATIVA
    now = as_utc(now)
    if now < as_utc(session.data_inicio):
        return SessionStatus.AGENDADA
    if now > as_utc(session.data_fim):
        return SessionStatus.ENCERRADA
    return SessionStatus.EM_ANDAMENTO


def check_time_window(data_inicio: datetime, data_fim: datetime) -> None:
    if as_utc(data_fim) < as_utc(data_inicio):
        raise InputValidationError(
            "Data de fim deve ser posterior à data de início",
        )


def check_session_create(
    identity: Identity,
    comunidade_id: int | None,
    community: CommunityLike | None,
    is_member: bool,
) -> None:
    """Who may open a session, and where.

    Global sessions (comunidade_id None) are Admin-only. Inside a community the
    caller must be Admin, its creator, or one of its members.
    """
    require_capability(
        identity, Capability.CREATE_SESSION,
        "Apenas administradores e gestores podem criar sessões",
    )
    if comunidade_id is not None and community is None:
        raise ResourceNotFoundError("Comunidade não encontrada")
    if community is None:
        require_capability(
            identity, Capability.CREATE_GLOBAL_SESSION,
            "Apenas administradores podem criar sessões sem comunidade",
        )
        return
    if has_capability(identity, Capability.BYPASS_OWNERSHIP):
        return
    if community.criador_id != identity.user_id and not is_member:
        raise AuthorizationError(
            "Você não tem permissão para criar sessões nesta comunidade",
        )


def check_session_edit(identity: Identity, session: VotingSessionLike) -> None:
    """Only the session creator or an Admin may edit or delete it."""
    require_manage(
        identity, session.criador_id,
        "Você não tem permissão para editar esta sessão",
    )


def check_project_manage(identity: Identity, manages_session: bool) -> None:
    """Projects are managed by Admins, or by Managers inside sessions they manage."""
    require_capability(
        identity, Capability.MANAGE_PROJECTS,
        "Apenas administradores e gestores podem gerenciar projetos",
    )
    if not manages_session:
        raise AuthorizationError(
            "Você não tem permissão para gerenciar projetos desta sessão",
        )
