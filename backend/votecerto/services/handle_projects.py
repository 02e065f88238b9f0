"""Project Handlers — candidate options inside sessions.

Invariants:
    - Managed by Admins, or by Managers inside sessions they manage
    - Visible only through a visible session (hidden = 404, for writes too)
    - Duplicate titulo within a session answers 409 from the unique constraint
"""

import logging

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.domain_types import Identity
from votecerto.core.errors import ConflictError, ResourceNotFoundError
from votecerto.core.session_lifecycle import check_project_manage
from votecerto.infrastructure.database import Conflict, commit_unique, insert_unique
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession
from votecerto.schemas.project import ProjectCreate, ProjectUpdate
from votecerto.services.query_filters import (
    is_session_visible, project_clause, vote_clause,
)
from votecerto.services.serializers import serialize_project, serialize_vote

logger = logging.getLogger(__name__)

_DUPLICATE_TITLE = "Já existe um projeto com este título na sessão"


class ProjectHandlers:
    """Project aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_visible(
        self, identity: Identity, projeto_id: int,
    ) -> tuple[Project, VotingSession]:
        result = await self.db.execute(
            select(Project, VotingSession)
            .join(VotingSession, VotingSession.id == Project.sessao_id)
            .where(and_(Project.id == projeto_id, project_clause(identity))),
        )
        row = result.first()
        if row is None:
            raise ResourceNotFoundError("Projeto não encontrado")
        return row[0], row[1]

    async def _require_manage(self, identity: Identity, sessao_id: int) -> None:
        check_project_manage(
            identity, await is_session_visible(self.db, identity, sessao_id),
        )

    # ─── Queries ────────────────────────────────────────────────

    async def list_visible(
        self, identity: Identity, sessao_id: int | None = None,
    ) -> list[dict]:
        query = (
            select(Project, VotingSession)
            .join(VotingSession, VotingSession.id == Project.sessao_id)
            .where(project_clause(identity))
        )
        if sessao_id is not None:
            query = query.where(Project.sessao_id == sessao_id)
        result = await self.db.execute(query.order_by(Project.id))
        return [serialize_project(p, s) for p, s in result.all()]

    async def get(self, identity: Identity, projeto_id: int) -> dict:
        project, session = await self._get_visible(identity, projeto_id)
        return serialize_project(project, session)

    async def list_votes(self, identity: Identity, projeto_id: int) -> list[dict]:
        project, session = await self._get_visible(identity, projeto_id)
        result = await self.db.execute(
            select(Vote, User)
            .join(User, User.id == Vote.usuario_id)
            .where(Vote.projeto_id == projeto_id, vote_clause(identity))
            .order_by(Vote.id),
        )
        return [serialize_vote(v, project, session, u) for v, u in result.all()]

    # ─── Commands ───────────────────────────────────────────────

    async def create(self, identity: Identity, body: ProjectCreate) -> dict:
        session = await self.db.get(VotingSession, body.sessao_id)
        if session is None:
            raise ResourceNotFoundError("Sessão não encontrada")
        await self._require_manage(identity, session.id)
        outcome = await insert_unique(self.db, Project(
            titulo=body.titulo,
            descricao_detalhada=body.descricao_detalhada,
            autor_responsavel=body.autor_responsavel,
            sessao_id=session.id,
        ))
        if isinstance(outcome, Conflict):
            raise ConflictError(_DUPLICATE_TITLE)
        project = outcome.entity
        logger.info(
            "Project created",
            extra={"user_id": identity.user_id, "sessao_id": session.id,
                   "projeto_id": project.id},
        )
        return serialize_project(project, session)

    async def update(
        self, identity: Identity, projeto_id: int, body: ProjectUpdate,
    ) -> dict:
        project, session = await self._get_visible(identity, projeto_id)
        await self._require_manage(identity, project.sessao_id)
        fields = body.model_fields_set
        if body.titulo is not None:
            project.titulo = body.titulo
        if "descricao_detalhada" in fields:
            project.descricao_detalhada = body.descricao_detalhada
        if "autor_responsavel" in fields:
            project.autor_responsavel = body.autor_responsavel
        if await commit_unique(self.db) is not None:
            raise ConflictError(_DUPLICATE_TITLE)
        await self.db.refresh(project)
        return serialize_project(project, session)

    async def delete(self, identity: Identity, projeto_id: int) -> None:
        project, _ = await self._get_visible(identity, projeto_id)
        await self._require_manage(identity, project.sessao_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.warning(
            "Project deleted",
            extra={"user_id": identity.user_id, "projeto_id": projeto_id},
        )
