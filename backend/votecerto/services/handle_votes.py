"""Vote Handlers — cast, edit, withdraw, list and aggregate results.

Invariants:
    - Cast: load session, membership and project, then one pure eligibility check
      (core/vote_eligibility.py); the (usuario_id, sessao_id) unique constraint decides
      duplicates, mapped to 409
    - Concurrent duplicate casts: exactly one commits, the other gets 409
    - Results gate (core/vote_results.check_results_access) runs before any count is read

Design Decisions:
    - No "already voted?" pre-check: it would race with a concurrent insert
    - Counting in SQL (GROUP BY projeto_id), ranking in core
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.domain_types import Identity
from votecerto.core.errors import ConflictError, InputValidationError, ResourceNotFoundError
from votecerto.core.vote_eligibility import (
    check_vote_edit, check_vote_eligibility, check_vote_withdraw,
)
from votecerto.core.vote_results import aggregate_results, check_results_access
from votecerto.infrastructure.database import Conflict, commit_unique, insert_unique
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession
from votecerto.schemas.vote import VoteCreate, VoteUpdate
from votecerto.services.query_filters import is_member, is_session_visible, vote_clause
from votecerto.services.serializers import serialize_session, serialize_vote

logger = logging.getLogger(__name__)

_ALREADY_VOTED = "Este participante já votou nesta sessão"


class VoteHandlers:
    """Vote aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, voto_id: int) -> Vote | None:
        return await self.db.get(Vote, voto_id)

    # ─── Commands ───────────────────────────────────────────────

    async def cast(self, identity: Identity, body: VoteCreate, now: datetime) -> dict:
        session = await self.db.get(VotingSession, body.sessao_id)
        member = False
        if session is not None and session.comunidade_id is not None:
            member = await is_member(self.db, identity.user_id, session.comunidade_id)
        project = await self.db.get(Project, body.projeto_id)
        session = check_vote_eligibility(identity, session, member, project, now)

        outcome = await insert_unique(self.db, Vote(
            usuario_id=identity.user_id,
            sessao_id=session.id,
            projeto_id=project.id,
            comentario=body.comentario,
            data_voto=datetime.now(timezone.utc),
        ))
        if isinstance(outcome, Conflict):
            logger.warning(
                "Duplicate vote rejected",
                extra={"user_id": identity.user_id, "sessao_id": body.sessao_id},
            )
            raise ConflictError(_ALREADY_VOTED)
        vote = outcome.entity
        logger.info(
            "Vote cast",
            extra={"user_id": identity.user_id, "sessao_id": session.id,
                   "projeto_id": project.id, "voto_id": vote.id},
        )
        return serialize_vote(vote, project, session)

    async def update(
        self, identity: Identity, voto_id: int, body: VoteUpdate, now: datetime,
    ) -> dict:
        vote = await self._get(voto_id)
        session = project = None
        if vote is not None:
            session = await self.db.get(VotingSession, vote.sessao_id)
            project = await self.db.get(Project, body.projeto_id or vote.projeto_id)
        check_vote_edit(identity, vote, session, project, now)

        vote.projeto_id = project.id
        if "comentario" in body.model_fields_set:
            vote.comentario = body.comentario
        vote.data_voto = datetime.now(timezone.utc)
        if await commit_unique(self.db) is not None:
            raise ConflictError(_ALREADY_VOTED)
        await self.db.refresh(vote)
        logger.info(
            "Vote updated",
            extra={"user_id": identity.user_id, "voto_id": voto_id},
        )
        return serialize_vote(vote, project, session)

    async def withdraw(self, identity: Identity, voto_id: int, now: datetime) -> None:
        vote = await self._get(voto_id)
        session = None
        if vote is not None:
            session = await self.db.get(VotingSession, vote.sessao_id)
        check_vote_withdraw(identity, vote, session, now)
        await self.db.delete(vote)
        await self.db.commit()
        logger.warning(
            "Vote withdrawn",
            extra={"user_id": identity.user_id, "voto_id": voto_id},
        )

    # ─── Queries ────────────────────────────────────────────────

    async def list_visible(
        self,
        identity: Identity,
        sessao_id: int | None = None,
        projeto_id: int | None = None,
    ) -> list[dict]:
        query = (
            select(Vote, Project, VotingSession, User)
            .join(Project, Project.id == Vote.projeto_id)
            .join(VotingSession, VotingSession.id == Vote.sessao_id)
            .join(User, User.id == Vote.usuario_id)
            .where(vote_clause(identity))
        )
        if sessao_id is not None:
            query = query.where(Vote.sessao_id == sessao_id)
        if projeto_id is not None:
            query = query.where(Vote.projeto_id == projeto_id)
        result = await self.db.execute(query.order_by(Vote.id))
        return [serialize_vote(v, p, s, u) for v, p, s, u in result.all()]

    async def get(self, identity: Identity, voto_id: int) -> dict:
        result = await self.db.execute(
            select(Vote, Project, VotingSession)
            .join(Project, Project.id == Vote.projeto_id)
            .join(VotingSession, VotingSession.id == Vote.sessao_id)
            .where(and_(Vote.id == voto_id, vote_clause(identity))),
        )
        row = result.first()
        if row is None:
            raise ResourceNotFoundError("Voto não encontrado")
        return serialize_vote(*row)

    async def results(
        self, identity: Identity, sessao_id: int | None, now: datetime,
    ) -> dict:
        if sessao_id is None:
            raise InputValidationError("ID da sessão é obrigatório")
        session = await self.db.get(VotingSession, sessao_id)
        if session is None:
            raise ResourceNotFoundError("Sessão não encontrada")

        voted = await self.db.execute(
            select(Vote.id).where(
                Vote.usuario_id == identity.user_id, Vote.sessao_id == sessao_id,
            ),
        )
        check_results_access(
            identity,
            has_voted=voted.scalar_one_or_none() is not None,
            manages_session=await is_session_visible(self.db, identity, sessao_id),
        )

        projects = await self.db.execute(
            select(Project).where(Project.sessao_id == sessao_id).order_by(Project.id),
        )
        counts = await self.db.execute(
            select(Vote.projeto_id, func.count(Vote.id))
            .where(Vote.sessao_id == sessao_id)
            .group_by(Vote.projeto_id),
        )
        aggregated = aggregate_results(
            [
                {"id": p.id, "titulo": p.titulo,
                 "descricao_detalhada": p.descricao_detalhada,
                 "autor_responsavel": p.autor_responsavel}
                for p in projects.scalars()
            ],
            dict(counts.all()),
        )
        return {"sessao": serialize_session(session, now), **aggregated}
