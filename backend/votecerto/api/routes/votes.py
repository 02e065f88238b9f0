"""Vote Routes — cast, list, results, edit and withdraw.

Invariants:
    - /resultados declared before /{voto_id} so it is not captured as an id
    - Missing sessao_id on /resultados answers 400 (checked in the service, not by FastAPI)
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity, utc_now
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.schemas.vote import VoteCreate, VoteUpdate
from votecerto.services.handle_votes import VoteHandlers

router = APIRouter(prefix="/api/votos", tags=["votos"])


@router.get("")
async def list_votes(
    sessao_id: int | None = Query(None),
    projeto_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await VoteHandlers(db).list_visible(identity, sessao_id, projeto_id)
    return {"data": data}


@router.post("", status_code=status.HTTP_201_CREATED)
async def cast_vote(
    body: VoteCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    data = await VoteHandlers(db).cast(identity, body, now)
    return {"data": data, "message": "Voto registrado com sucesso"}


@router.get("/resultados")
async def vote_results(
    sessao_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    return {"data": await VoteHandlers(db).results(identity, sessao_id, now)}


@router.get("/{voto_id}")
async def get_vote(
    voto_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await VoteHandlers(db).get(identity, voto_id)}


@router.put("/{voto_id}")
async def update_vote(
    voto_id: int,
    body: VoteUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    data = await VoteHandlers(db).update(identity, voto_id, body, now)
    return {"data": data, "message": "Voto atualizado com sucesso"}


@router.delete("/{voto_id}")
async def withdraw_vote(
    voto_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(utc_now),
):
    await VoteHandlers(db).withdraw(identity, voto_id, now)
    return {"message": "Voto excluído com sucesso"}
