"""Report Routes — masked vote reports (JSON) and .xlsx export."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.infrastructure.spreadsheet import XLSX_MEDIA_TYPE
from votecerto.services.handle_reports import ReportHandlers

router = APIRouter(prefix="/api/relatorios", tags=["relatorios"])


@router.get("/votos")
async def vote_report(
    sessao_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await ReportHandlers(db).vote_reports(identity, sessao_id)}


@router.get("/votos/exportar")
async def export_vote_report(
    sessao_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    filename, content = await ReportHandlers(db).export_votes(identity, sessao_id)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
