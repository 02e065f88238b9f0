"""Vote Eligibility — ordered precondition chain for casting, editing and withdrawing votes.

Invariants:
    - Cast checks run in a fixed order; the first violation wins:
        1. role is Participant              -> 403
        2. session exists                   -> 404
        3. session is live                  -> 400
        4. member of the session community  -> 403 (global sessions skip this)
        5. project belongs to the session   -> 404
    - Duplicate votes are NOT checked here: the (usuario_id, sessao_id) unique
      constraint decides, and the service maps the conflict to 409
    - All functions are PURE: no IO, no async, no DB

Design Decisions:
    - Service loads session/membership/project first, then calls one pure function:
      the whole rule set is testable without a database
    - A pre-check for an existing vote would be race-prone; the constraint is the only arbiter
"""

from datetime import datetime

from votecerto.core.access_policy import Capability, has_capability, require_capability
from votecerto.core.domain_types import Identity
from votecerto.core.errors import (
    AuthorizationError, ResourceNotFoundError, SessionNotLiveError,
)
from votecerto.core.repository_protocols import (
    ProjectLike, VoteLike, VotingSessionLike,
)
from votecerto.core.session_lifecycle import is_session_live


def check_vote_eligibility(
    identity: Identity,
    session: VotingSessionLike | None,
    is_member: bool,
    project: ProjectLike | None,
    now: datetime,
) -> VotingSessionLike:
    """Run the cast-vote precondition chain. Returns the (non-None) session."""
    require_capability(
        identity, Capability.CAST_VOTE, "Apenas participantes podem votar",
    )
    if session is None:
        raise ResourceNotFoundError("Sessão não encontrada")
    if not is_session_live(session, now):
        raise SessionNotLiveError()
    if session.comunidade_id is not None and not is_member:
        raise AuthorizationError("Você não é membro desta comunidade")
    if project is None or project.sessao_id != session.id:
        raise ResourceNotFoundError("Projeto não encontrado nesta sessão")
    return session


def check_vote_edit(
    identity: Identity,
    vote: VoteLike | None,
    session: VotingSessionLike | None,
    project: ProjectLike | None,
    now: datetime,
) -> None:
    """Only the voter may change their vote, only while the session is live,
    and only to another project of the same session."""
    require_capability(
        identity, Capability.CAST_VOTE,
        "Apenas participantes podem gerenciar votos",
    )
    if vote is None:
        raise ResourceNotFoundError("Voto não encontrado")
    if vote.usuario_id != identity.user_id:
        raise AuthorizationError("Não autorizado a editar este voto")
    if session is None:
        raise ResourceNotFoundError("Sessão não encontrada")
    if not is_session_live(session, now):
        raise SessionNotLiveError()
    if project is None or project.sessao_id != vote.sessao_id:
        raise ResourceNotFoundError("Projeto não encontrado nesta sessão")


def check_vote_withdraw(
    identity: Identity,
    vote: VoteLike | None,
    session: VotingSessionLike | None,
    now: datetime,
) -> None:
    """Admin may delete any vote; the voter only while the session is live."""
    if vote is None:
        raise ResourceNotFoundError("Voto não encontrado")
    if has_capability(identity, Capability.BYPASS_OWNERSHIP):
        return
    if vote.usuario_id != identity.user_id:
        raise AuthorizationError("Não autorizado a excluir este voto")
    if session is None or not is_session_live(session, now):
        raise SessionNotLiveError()
