"""Project Routes — CRUD plus per-project vote listing."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.schemas.project import ProjectCreate, ProjectUpdate
from votecerto.services.handle_projects import ProjectHandlers

router = APIRouter(prefix="/api/projetos", tags=["projetos"])


@router.get("")
async def list_projects(
    sessao_id: int | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await ProjectHandlers(db).list_visible(identity, sessao_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await ProjectHandlers(db).create(identity, body)
    return {"data": data, "message": "Projeto criado com sucesso"}


@router.get("/{projeto_id}")
async def get_project(
    projeto_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await ProjectHandlers(db).get(identity, projeto_id)}


@router.put("/{projeto_id}")
async def update_project(
    projeto_id: int,
    body: ProjectUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    data = await ProjectHandlers(db).update(identity, projeto_id, body)
    return {"data": data, "message": "Projeto atualizado com sucesso"}


@router.delete("/{projeto_id}")
async def delete_project(
    projeto_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    await ProjectHandlers(db).delete(identity, projeto_id)
    return {"message": "Projeto excluído com sucesso"}


@router.get("/{projeto_id}/votos")
async def list_project_votes(
    projeto_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await ProjectHandlers(db).list_votes(identity, projeto_id)}
