"""Dashboard Handlers — single caller-scoped aggregate for the landing page.

Invariants:
    - Every collection filtered by the caller's record scope
    - Users listed only for Admins (empty list otherwise)
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.access_policy import Capability, has_capability
from votecerto.core.domain_types import Identity
from votecerto.services.handle_communities import CommunityHandlers
from votecerto.services.handle_projects import ProjectHandlers
from votecerto.services.handle_sessions import SessionHandlers
from votecerto.services.handle_users import UserHandlers
from votecerto.services.handle_votes import VoteHandlers


class DashboardHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def statistics(self, identity: Identity, now: datetime) -> dict:
        usuarios = []
        if has_capability(identity, Capability.MANAGE_USERS):
            usuarios = await UserHandlers(self.db).list_users(identity)
        sessoes = await SessionHandlers(self.db).list_visible(identity, now)
        projetos = await ProjectHandlers(self.db).list_visible(identity)
        votos = await VoteHandlers(self.db).list_visible(identity)
        comunidades = await CommunityHandlers(self.db).list_visible(identity)
        return {
            "usuarios": usuarios,
            "sessoes": sessoes,
            "projetos": projetos,
            "votos": votos,
            "comunidades": comunidades,
            "totais": {
                "usuarios": len(usuarios),
                "sessoes": len(sessoes),
                "sessoes_em_andamento": sum(1 for s in sessoes if s["em_andamento"]),
                "projetos": len(projetos),
                "votos": len(votos),
                "comunidades": len(comunidades),
            },
        }
