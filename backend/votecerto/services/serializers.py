"""Serializers — ORM rows to JSON-ready dicts for API payloads.

Invariants:
    - Datetimes emitted as ISO-8601 with UTC offset (naive DB values read as UTC)
    - password_hash never serialized; cpf only where the caller may see it unmasked
    - Invite code only included when include_code is set by the caller's handler
"""

from datetime import datetime

from votecerto.core.session_lifecycle import as_utc, is_session_live, session_status
from votecerto.models.community import Community
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession


def iso(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value is not None else None


def serialize_user(user: User, include_cpf: bool = False) -> dict:
    data = {
        "id": user.id,
        "email": user.email,
        "tipo": user.tipo,
        "nome": user.nome,
        "data_criacao": iso(user.data_criacao),
        "ultimo_acesso": iso(user.ultimo_acesso),
    }
    if include_cpf:
        data["cpf"] = user.cpf
    return data


def serialize_community(
    community: Community,
    include_code: bool,
    total_membros: int | None = None,
    total_sessoes: int | None = None,
) -> dict:
    data = {
        "id": community.id,
        "nome": community.nome,
        "descricao": community.descricao,
        "criador_id": community.criador_id,
        "data_criacao": iso(community.data_criacao),
    }
    if include_code:
        data["codigo"] = community.codigo
    if total_membros is not None:
        data["total_membros"] = total_membros
    if total_sessoes is not None:
        data["total_sessoes"] = total_sessoes
    return data


def serialize_session(
    session: VotingSession,
    now: datetime,
    comunidade: Community | None = None,
    total_projetos: int | None = None,
    total_votos: int | None = None,
) -> dict:
    data = {
        "id": session.id,
        "titulo": session.titulo,
        "descricao": session.descricao,
        "data_inicio": iso(session.data_inicio),
        "data_fim": iso(session.data_fim),
        "ativa": session.ativa,
        "criador_id": session.criador_id,
        "comunidade_id": session.comunidade_id,
        "data_criacao": iso(session.data_criacao),
        "status": session_status(session, now).value,
        "em_andamento": is_session_live(session, now),
        "comunidade": (
            {"id": comunidade.id, "nome": comunidade.nome} if comunidade else None
        ),
    }
    if total_projetos is not None:
        data["total_projetos"] = total_projetos
    if total_votos is not None:
        data["total_votos"] = total_votos
    return data


def serialize_project(
    project: Project, sessao: VotingSession | None = None,
) -> dict:
    return {
        "id": project.id,
        "titulo": project.titulo,
        "descricao_detalhada": project.descricao_detalhada,
        "autor_responsavel": project.autor_responsavel,
        "sessao_id": project.sessao_id,
        "data_criacao": iso(project.data_criacao),
        "sessao": {"id": sessao.id, "titulo": sessao.titulo} if sessao else None,
    }


def serialize_vote(
    vote: Vote,
    projeto: Project | None = None,
    sessao: VotingSession | None = None,
    usuario: User | None = None,
) -> dict:
    data = {
        "id": vote.id,
        "usuario_id": vote.usuario_id,
        "sessao_id": vote.sessao_id,
        "projeto_id": vote.projeto_id,
        "comentario": vote.comentario,
        "data_voto": iso(vote.data_voto),
        "projeto": {"id": projeto.id, "titulo": projeto.titulo} if projeto else None,
        "sessao": {"id": sessao.id, "titulo": sessao.titulo} if sessao else None,
    }
    if usuario is not None:
        data["usuario"] = {"id": usuario.id, "nome": usuario.nome, "email": usuario.email}
    return data
