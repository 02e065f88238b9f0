"""Community Handlers — CRUD, join-by-code and invite-code issuance.

Invariants:
    - Creator auto-enrolled as member on creation
    - Invite codes unique: generated, checked against the store, retried until free;
      the unique constraint on codigo is the final arbiter (a lost race retries)
    - Joining twice answers 409 from the membership unique constraint, never a pre-check
    - Code disclosed only to the creator or an Admin

Design Decisions:
    - Unbounded retry loop: 2^32 keyspace, collisions are rare
    - Regeneration writes through an UPDATE statement so a rolled-back attempt leaves
      no expired instance behind
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.community_rules import (
    can_see_code, check_code_regeneration, check_community_create,
    check_community_delete, check_community_edit, check_community_visible,
)
from votecerto.core.domain_types import Identity
from votecerto.core.errors import ConflictError, ResourceNotFoundError
from votecerto.core.invite_codes import generate_invite_code
from votecerto.infrastructure.database import Conflict, commit_unique, insert_unique
from votecerto.models.community import CODE_CONSTRAINT, Community
from votecerto.models.membership import Membership
from votecerto.models.user import User
from votecerto.models.voting_session import VotingSession
from votecerto.schemas.community import CommunityCreate, CommunityJoin, CommunityUpdate
from votecerto.services.query_filters import community_clause, is_member
from votecerto.services.serializers import iso, serialize_community

logger = logging.getLogger(__name__)

_DUPLICATE_NAME = "Já existe uma comunidade com este nome"


class CommunityHandlers:
    """Community aggregate: memberships and invite codes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, comunidade_id: int) -> Community:
        community = await self.db.get(Community, comunidade_id)
        if community is None:
            raise ResourceNotFoundError("Comunidade não encontrada")
        return community

    async def issue_unique_code(self) -> str:
        while True:
            code = generate_invite_code()
            result = await self.db.execute(
                select(Community.id).where(Community.codigo == code),
            )
            if result.scalar_one_or_none() is None:
                return code

    async def _counts(self, ids: list[int]) -> tuple[dict[int, int], dict[int, int]]:
        if not ids:
            return {}, {}
        members = await self.db.execute(
            select(Membership.comunidade_id, func.count(Membership.id))
            .where(Membership.comunidade_id.in_(ids))
            .group_by(Membership.comunidade_id),
        )
        sessions = await self.db.execute(
            select(VotingSession.comunidade_id, func.count(VotingSession.id))
            .where(VotingSession.comunidade_id.in_(ids))
            .group_by(VotingSession.comunidade_id),
        )
        return dict(members.all()), dict(sessions.all())

    async def _serialize_many(
        self, identity: Identity, communities: list[Community],
    ) -> list[dict]:
        members, sessions = await self._counts([c.id for c in communities])
        return [
            serialize_community(
                c, include_code=can_see_code(identity, c),
                total_membros=members.get(c.id, 0),
                total_sessoes=sessions.get(c.id, 0),
            )
            for c in communities
        ]

    # ─── Queries ────────────────────────────────────────────────

    async def list_visible(self, identity: Identity) -> list[dict]:
        result = await self.db.execute(
            select(Community).where(community_clause(identity)).order_by(Community.id),
        )
        return await self._serialize_many(identity, list(result.scalars()))

    async def list_mine(self, identity: Identity) -> list[dict]:
        """Communities the caller belongs to (Admin: all)."""
        query = select(Community).order_by(Community.id)
        if not identity.is_admin:
            query = query.join(
                Membership, Membership.comunidade_id == Community.id,
            ).where(Membership.usuario_id == identity.user_id)
        result = await self.db.execute(query)
        return await self._serialize_many(identity, list(result.scalars()))

    async def get(self, identity: Identity, comunidade_id: int) -> dict:
        community = await self.db.get(Community, comunidade_id)
        member = community is not None and await is_member(
            self.db, identity.user_id, comunidade_id,
        )
        check_community_visible(identity, community, member)

        rows = await self.db.execute(
            select(User, Membership.data_ingresso)
            .join(Membership, Membership.usuario_id == User.id)
            .where(Membership.comunidade_id == comunidade_id)
            .order_by(Membership.data_ingresso, User.id),
        )
        membros = [
            {"id": u.id, "nome": u.nome, "email": u.email, "tipo": u.tipo,
             "data_ingresso": iso(joined)}
            for u, joined in rows.all()
        ]
        _, sessions = await self._counts([comunidade_id])
        data = serialize_community(
            community, include_code=can_see_code(identity, community),
            total_membros=len(membros),
            total_sessoes=sessions.get(comunidade_id, 0),
        )
        data["membros"] = membros
        return data

    # ─── Commands ───────────────────────────────────────────────

    async def create(self, identity: Identity, body: CommunityCreate) -> dict:
        check_community_create(identity)
        while True:
            outcome = await insert_unique(self.db, Community(
                nome=body.nome,
                descricao=body.descricao,
                codigo=await self.issue_unique_code(),
                criador_id=identity.user_id,
            ))
            if not isinstance(outcome, Conflict):
                break
            if not outcome.involves(CODE_CONSTRAINT):
                raise ConflictError(_DUPLICATE_NAME)
        community = outcome.entity

        self.db.add(Membership(usuario_id=identity.user_id, comunidade_id=community.id))
        await self.db.commit()
        logger.info(
            "Community created",
            extra={"user_id": identity.user_id, "comunidade_id": community.id},
        )
        return serialize_community(
            community, include_code=True, total_membros=1, total_sessoes=0,
        )

    async def update(
        self, identity: Identity, comunidade_id: int, body: CommunityUpdate,
    ) -> dict:
        community = await self._get(comunidade_id)
        check_community_edit(identity, community)
        if body.nome is not None:
            community.nome = body.nome
        if "descricao" in body.model_fields_set:
            community.descricao = body.descricao
        if await commit_unique(self.db) is not None:
            raise ConflictError(_DUPLICATE_NAME)
        await self.db.refresh(community)
        return serialize_community(community, include_code=True)

    async def delete(self, identity: Identity, comunidade_id: int) -> None:
        community = await self._get(comunidade_id)
        check_community_delete(identity, community)
        await self.db.delete(community)
        await self.db.commit()
        logger.warning(
            "Community deleted",
            extra={"user_id": identity.user_id, "comunidade_id": comunidade_id},
        )

    async def join(self, identity: Identity, body: CommunityJoin) -> dict:
        result = await self.db.execute(
            select(Community).where(Community.codigo == body.codigo),
        )
        community = result.scalar_one_or_none()
        if community is None:
            raise ResourceNotFoundError("Código de convite inválido")
        outcome = await insert_unique(self.db, Membership(
            usuario_id=identity.user_id, comunidade_id=community.id,
        ))
        if isinstance(outcome, Conflict):
            raise ConflictError("Você já é membro desta comunidade")
        logger.info(
            "Community joined",
            extra={"user_id": identity.user_id, "comunidade_id": community.id},
        )
        return serialize_community(community, include_code=can_see_code(identity, community))

    async def regenerate_code(self, identity: Identity, comunidade_id: int) -> dict:
        community = await self._get(comunidade_id)
        check_code_regeneration(identity, community)
        while True:
            await self.db.execute(
                update(Community)
                .where(Community.id == comunidade_id)
                .values(codigo=await self.issue_unique_code()),
            )
            conflict = await commit_unique(self.db)
            if conflict is None:
                break
            if not conflict.involves(CODE_CONSTRAINT):
                raise ConflictError("Não foi possível regenerar o código de convite")
        await self.db.refresh(community)
        logger.info(
            "Invite code regenerated",
            extra={"user_id": identity.user_id, "comunidade_id": comunidade_id},
        )
        return serialize_community(community, include_code=True)
