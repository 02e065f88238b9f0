"""Session Handlers — voting-session CRUD and per-session listings.

Invariants:
    - Lists and details restricted by query_filters.session_clause (hidden = 404)
    - Create rules in core/session_lifecycle.check_session_create; edit/delete creator or Admin
    - Time window re-validated on update against the merged (stored + incoming) bounds
    - Stored timestamps always UTC-aware
"""

import logging
from datetime import datetime

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.domain_types import Identity
from votecerto.core.errors import ResourceNotFoundError
from votecerto.core.session_lifecycle import (
    as_utc, check_session_create, check_session_edit, check_time_window,
)
from votecerto.models.community import Community
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession
from votecerto.schemas.voting_session import SessionCreate, SessionUpdate
from votecerto.services.query_filters import is_member, session_clause, vote_clause
from votecerto.services.serializers import (
    serialize_project, serialize_session, serialize_vote,
)

logger = logging.getLogger(__name__)


class SessionHandlers:
    """Voting-session aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_visible(self, identity: Identity, sessao_id: int) -> VotingSession:
        result = await self.db.execute(
            select(VotingSession).where(
                and_(VotingSession.id == sessao_id, session_clause(identity)),
            ),
        )
        session = result.scalar_one_or_none()
        if session is None:
            raise ResourceNotFoundError("Sessão não encontrada")
        return session

    async def _get(self, sessao_id: int) -> VotingSession:
        session = await self.db.get(VotingSession, sessao_id)
        if session is None:
            raise ResourceNotFoundError("Sessão não encontrada")
        return session

    async def _serialize_many(
        self, sessions: list[VotingSession], now: datetime,
    ) -> list[dict]:
        ids = [s.id for s in sessions]
        community_ids = {s.comunidade_id for s in sessions if s.comunidade_id}
        communities: dict[int, Community] = {}
        projects: dict[int, int] = {}
        votes: dict[int, int] = {}
        if community_ids:
            rows = await self.db.execute(
                select(Community).where(Community.id.in_(community_ids)),
            )
            communities = {c.id: c for c in rows.scalars()}
        if ids:
            rows = await self.db.execute(
                select(Project.sessao_id, func.count(Project.id))
                .where(Project.sessao_id.in_(ids)).group_by(Project.sessao_id),
            )
            projects = dict(rows.all())
            rows = await self.db.execute(
                select(Vote.sessao_id, func.count(Vote.id))
                .where(Vote.sessao_id.in_(ids)).group_by(Vote.sessao_id),
            )
            votes = dict(rows.all())
        return [
            serialize_session(
                s, now,
                comunidade=communities.get(s.comunidade_id),
                total_projetos=projects.get(s.id, 0),
                total_votos=votes.get(s.id, 0),
            )
            for s in sessions
        ]

    # ─── Queries ────────────────────────────────────────────────

    async def list_visible(
        self,
        identity: Identity,
        now: datetime,
        ativa: bool | None = None,
        comunidade_id: int | None = None,
    ) -> list[dict]:
        query = select(VotingSession).where(session_clause(identity))
        if ativa is not None:
            query = query.where(VotingSession.ativa == ativa)
        if comunidade_id is not None:
            query = query.where(VotingSession.comunidade_id == comunidade_id)
        result = await self.db.execute(query.order_by(VotingSession.id))
        return await self._serialize_many(list(result.scalars()), now)

    async def get(self, identity: Identity, sessao_id: int, now: datetime) -> dict:
        session = await self.get_visible(identity, sessao_id)
        return (await self._serialize_many([session], now))[0]

    async def list_projects(self, identity: Identity, sessao_id: int) -> list[dict]:
        session = await self.get_visible(identity, sessao_id)
        result = await self.db.execute(
            select(Project).where(Project.sessao_id == sessao_id).order_by(Project.id),
        )
        return [serialize_project(p, session) for p in result.scalars()]

    async def list_votes(self, identity: Identity, sessao_id: int) -> list[dict]:
        session = await self.get_visible(identity, sessao_id)
        result = await self.db.execute(
            select(Vote, Project, User)
            .join(Project, Project.id == Vote.projeto_id)
            .join(User, User.id == Vote.usuario_id)
            .where(Vote.sessao_id == sessao_id, vote_clause(identity))
            .order_by(Vote.id),
        )
        return [serialize_vote(v, p, session, u) for v, p, u in result.all()]

    # ─── Commands ───────────────────────────────────────────────

    async def create(self, identity: Identity, body: SessionCreate, now: datetime) -> dict:
        community = None
        member = False
        if body.comunidade_id is not None:
            community = await self.db.get(Community, body.comunidade_id)
            if community is not None:
                member = await is_member(self.db, identity.user_id, community.id)
        check_session_create(identity, body.comunidade_id, community, member)

        session = VotingSession(
            titulo=body.titulo,
            descricao=body.descricao,
            data_inicio=as_utc(body.data_inicio),
            data_fim=as_utc(body.data_fim),
            ativa=body.ativa,
            criador_id=identity.user_id,
            comunidade_id=body.comunidade_id,
        )
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        logger.info(
            "Session created",
            extra={
                "user_id": identity.user_id, "sessao_id": session.id,
                "comunidade_id": session.comunidade_id,
            },
        )
        return serialize_session(session, now, comunidade=community)

    async def update(
        self, identity: Identity, sessao_id: int, body: SessionUpdate, now: datetime,
    ) -> dict:
        session = await self._get(sessao_id)
        check_session_edit(identity, session)
        inicio = as_utc(body.data_inicio or session.data_inicio)
        fim = as_utc(body.data_fim or session.data_fim)
        check_time_window(inicio, fim)

        if body.titulo is not None:
            session.titulo = body.titulo
        if "descricao" in body.model_fields_set:
            session.descricao = body.descricao
        if body.ativa is not None:
            session.ativa = body.ativa
        session.data_inicio = inicio
        session.data_fim = fim
        await self.db.commit()
        await self.db.refresh(session)
        return (await self._serialize_many([session], now))[0]

    async def delete(self, identity: Identity, sessao_id: int) -> None:
        session = await self._get(sessao_id)
        check_session_edit(identity, session)
        await self.db.delete(session)
        await self.db.commit()
        logger.warning(
            "Session deleted",
            extra={"user_id": identity.user_id, "sessao_id": sessao_id},
        )
