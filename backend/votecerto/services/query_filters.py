"""Query Filters — turn access-policy record scopes into SQLAlchemy WHERE clauses.

Invariants:
    - One clause builder per resource; all list/detail queries go through them
    - ALL scope yields true() so callers can always write .where(clause)
    - Participants see only sessions of communities they belong to; global sessions
      (comunidade_id NULL) are outside every membership, so only Admins list them

Design Decisions:
    - Subqueries (IN (SELECT ...)) over joins: a clause composes with any other filter
      without duplicating rows
"""

from sqlalchemy import ColumnElement, Select, and_, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.access_policy import RecordScope, Resource, scope_for
from votecerto.core.domain_types import Identity
from votecerto.models.community import Community
from votecerto.models.membership import Membership
from votecerto.models.project import Project
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession


def created_community_ids(user_id: int) -> Select:
    return select(Community.id).where(Community.criador_id == user_id)


def member_community_ids(user_id: int) -> Select:
    return select(Membership.comunidade_id).where(Membership.usuario_id == user_id)


def session_clause(identity: Identity) -> ColumnElement[bool]:
    scope = scope_for(identity, Resource.SESSION)
    uid = identity.user_id
    if scope == RecordScope.ALL:
        return true()
    if scope == RecordScope.MANAGED:
        return or_(
            VotingSession.criador_id == uid,
            VotingSession.comunidade_id.in_(created_community_ids(uid)),
        )
    return VotingSession.comunidade_id.in_(member_community_ids(uid))


def visible_session_ids(identity: Identity) -> Select:
    return select(VotingSession.id).where(session_clause(identity))


def project_clause(identity: Identity) -> ColumnElement[bool]:
    if scope_for(identity, Resource.PROJECT) == RecordScope.ALL:
        return true()
    return Project.sessao_id.in_(visible_session_ids(identity))


def vote_clause(identity: Identity) -> ColumnElement[bool]:
    scope = scope_for(identity, Resource.VOTE)
    if scope == RecordScope.ALL:
        return true()
    if scope == RecordScope.OWN:
        return Vote.usuario_id == identity.user_id
    return Vote.sessao_id.in_(visible_session_ids(identity))


def community_clause(identity: Identity) -> ColumnElement[bool]:
    scope = scope_for(identity, Resource.COMMUNITY)
    uid = identity.user_id
    if scope == RecordScope.ALL:
        return true()
    if scope == RecordScope.MANAGED:
        return or_(
            Community.criador_id == uid,
            Community.id.in_(member_community_ids(uid)),
        )
    return Community.id.in_(member_community_ids(uid))


async def is_session_visible(
    db: AsyncSession, identity: Identity, sessao_id: int,
) -> bool:
    """True if the caller's scope covers the session (for Managers: they manage it)."""
    result = await db.execute(
        select(VotingSession.id).where(
            and_(VotingSession.id == sessao_id, session_clause(identity)),
        ),
    )
    return result.scalar_one_or_none() is not None


async def is_member(db: AsyncSession, user_id: int, comunidade_id: int) -> bool:
    result = await db.execute(
        select(Membership.id).where(
            Membership.usuario_id == user_id,
            Membership.comunidade_id == comunidade_id,
        ),
    )
    return result.scalar_one_or_none() is not None
