"""Community Routes — CRUD, membership listing, join by invite code, code regeneration.

Invariants:
    - Static paths (/minhas, /ingressar) declared before /{comunidade_id}
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.schemas.community import CommunityCreate, CommunityJoin, CommunityUpdate
from votecerto.services.handle_communities import CommunityHandlers

router = APIRouter(prefix="/api/communities", tags=["communities"])


@router.get("")
async def list_communities(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await CommunityHandlers(db).list_visible(identity)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_community(
    body: CommunityCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await CommunityHandlers(db).create(identity, body)
    return {"data": data, "message": "Comunidade criada com sucesso"}


@router.get("/minhas")
async def my_communities(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await CommunityHandlers(db).list_mine(identity)}


@router.post("/ingressar", status_code=status.HTTP_201_CREATED)
async def join_community(
    body: CommunityJoin,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await CommunityHandlers(db).join(identity, body)
    return {
        "data": data,
        "message": f'Você ingressou na comunidade "{data["nome"]}" com sucesso',
    }


@router.get("/{comunidade_id}")
async def get_community(
    comunidade_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await CommunityHandlers(db).get(identity, comunidade_id)}


@router.put("/{comunidade_id}")
async def update_community(
    comunidade_id: int,
    body: CommunityUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await CommunityHandlers(db).update(identity, comunidade_id, body)
    return {"data": data, "message": "Comunidade atualizada com sucesso"}


@router.delete("/{comunidade_id}")
async def delete_community(
    comunidade_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    await CommunityHandlers(db).delete(identity, comunidade_id)
    return {"message": "Comunidade excluída com sucesso"}


@router.post("/{comunidade_id}/regenerar-codigo")
async def regenerate_code(
    comunidade_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await CommunityHandlers(db).regenerate_code(identity, comunidade_id)
    return {"data": data, "message": "Código de convite regenerado com sucesso"}
