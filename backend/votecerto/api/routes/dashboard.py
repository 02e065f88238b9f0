"""Dashboard Routes — one caller-scoped fetch for the landing page."""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity, utc_now
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.services.handle_dashboard import DashboardHandlers

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/estatisticas")
async def statistics(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    return {"data": await DashboardHandlers(db).statistics(identity, now)}
