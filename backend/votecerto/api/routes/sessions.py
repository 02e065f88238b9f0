"""Voting Session Routes — CRUD plus per-session project and vote listings."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity, utc_now
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.schemas.voting_session import SessionCreate, SessionUpdate
from votecerto.services.handle_sessions import SessionHandlers

router = APIRouter(prefix="/api/sessoes", tags=["sessoes"])


@router.get("")
async def list_sessions(
    ativa: bool | None = Query(None),
    comunidade_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    data = await SessionHandlers(db).list_visible(
        identity, now, ativa=ativa, comunidade_id=comunidade_id,
    )
    return {"data": data}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    body: SessionCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    data = await SessionHandlers(db).create(identity, body, now)
    return {"data": data, "message": "Sessão criada com sucesso"}


@router.get("/{sessao_id}")
async def get_session(
    sessao_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    return {"data": await SessionHandlers(db).get(identity, sessao_id, now)}


@router.put("/{sessao_id}")
async def update_session(
    sessao_id: int,
    body: SessionUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    data = await SessionHandlers(db).update(identity, sessao_id, body, now)
    return {"data": data, "message": "Sessão atualizada com sucesso"}


@router.delete("/{sessao_id}")
async def delete_session(
    sessao_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    await SessionHandlers(db).delete(identity, sessao_id)
    return {"message": "Sessão excluída com sucesso"}


@router.get("/{sessao_id}/projetos")
async def list_session_projects(
    sessao_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await SessionHandlers(db).list_projects(identity, sessao_id)}


@router.get("/{sessao_id}/votos")
async def list_session_votes(
    sessao_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await SessionHandlers(db).list_votes(identity, sessao_id)}
