"""Report Handlers — masked-PII vote reports and their spreadsheet export.

Invariants:
    - Admin/Manager only; Managers limited to sessions they manage (query_filters)
    - CPF masked in core/vote_report.py before leaving the service
    - Export requires a sessao_id; the workbook mirrors the JSON report of that session
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.domain_types import Identity
from votecerto.core.errors import InputValidationError, ResourceNotFoundError
from votecerto.core.vote_report import (
    SPREADSHEET_COLUMNS, build_session_report, build_spreadsheet_rows,
    check_report_access, export_filename,
)
from votecerto.infrastructure.spreadsheet import build_workbook
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession
from votecerto.services.query_filters import session_clause

logger = logging.getLogger(__name__)


class ReportHandlers:
    """Vote reports."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _report_for(self, session: VotingSession) -> dict:
        projects = await self.db.execute(
            select(Project).where(Project.sessao_id == session.id).order_by(Project.id),
        )
        votes = await self.db.execute(
            select(Vote, User.nome, User.cpf)
            .join(User, User.id == Vote.usuario_id)
            .where(Vote.sessao_id == session.id)
            .order_by(Vote.data_voto.desc(), Vote.id.desc()),
        )
        return build_session_report(
            session,
            [
                {"id": p.id, "titulo": p.titulo,
                 "descricao_detalhada": p.descricao_detalhada}
                for p in projects.scalars()
            ],
            [
                {"id": v.id, "projeto_id": v.projeto_id, "nome": nome, "cpf": cpf,
                 "data_voto": v.data_voto, "comentario": v.comentario}
                for v, nome, cpf in votes.all()
            ],
        )

    async def vote_reports(
        self, identity: Identity, sessao_id: int | None = None,
    ) -> list[dict]:
        """One report per visible session, newest start first."""
        check_report_access(identity)
        query = select(VotingSession).where(session_clause(identity))
        if sessao_id is not None:
            query = query.where(VotingSession.id == sessao_id)
        result = await self.db.execute(
            query.order_by(VotingSession.data_inicio.desc(), VotingSession.id),
        )
        sessions = list(result.scalars())
        if sessao_id is not None and not sessions:
            raise ResourceNotFoundError("Sessão não encontrada")
        return [await self._report_for(s) for s in sessions]

    async def export_votes(
        self, identity: Identity, sessao_id: int | None,
    ) -> tuple[str, bytes]:
        """Returns (filename, xlsx bytes)."""
        check_report_access(identity)
        if sessao_id is None:
            raise InputValidationError("ID da sessão é obrigatório")
        report = (await self.vote_reports(identity, sessao_id))[0]
        content = build_workbook(SPREADSHEET_COLUMNS, build_spreadsheet_rows(report))
        logger.info(
            "Vote report exported",
            extra={"user_id": identity.user_id, "sessao_id": sessao_id},
        )
        return export_filename(report["titulo"]), content
