"""User Routes — public signup, admin listing, self-or-admin detail/edit, admin delete."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity, get_optional_identity
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.schemas.user import UserCreate, UserUpdate
from votecerto.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/usuarios", tags=["usuarios"])


@router.get("")
async def list_users(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await UserHandlers(db).list_users(identity)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    identity: Identity | None = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await UserHandlers(db).create(identity, body)
    return {"data": data, "message": "Usuário criado com sucesso"}


@router.get("/{usuario_id}")
async def get_user(
    usuario_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await UserHandlers(db).get(identity, usuario_id)}


@router.put("/{usuario_id}")
async def update_user(
    usuario_id: int,
    body: UserUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await UserHandlers(db).update(identity, usuario_id, body)
    return {"data": data, "message": "Usuário atualizado com sucesso"}


@router.delete("/{usuario_id}")
async def delete_user(
    usuario_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    await UserHandlers(db).delete(identity, usuario_id)
    return {"message": "Usuário excluído com sucesso"}
