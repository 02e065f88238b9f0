"""Request Schemas — boundary validation with pt-BR messages.

Invariants:
    - Invalid input raises ValidationError carrying a user-facing message
    - Normalization (strip, upper, CPF digits) happens at the boundary
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from votecerto.core.domain_types import UserRole
from votecerto.schemas.auth import LoginRequest
from votecerto.schemas.community import CommunityCreate, CommunityJoin
from votecerto.schemas.user import UserCreate, UserUpdate
from votecerto.schemas.vote import VoteCreate
from votecerto.schemas.voting_session import SessionCreate, SessionUpdate


def _messages(exc: pytest.ExceptionInfo) -> str:
    return " ".join(e["msg"] for e in exc.value.errors())


# --- users ---------------------------------------------------------------------

def test_user_defaults_to_participant():
    user = UserCreate(email="Ana@Example.com", password="segredo")
    assert user.tipo == UserRole.PARTICIPANTE
    assert user.email == "Ana@example.com"


def test_short_password_rejected():
    with pytest.raises(ValidationError) as exc:
        UserCreate(email="ana@example.com", password="123")
    assert "Senha deve ter no mínimo 6 caracteres" in _messages(exc)


def test_invalid_email_rejected():
    with pytest.raises(ValidationError) as exc:
        UserCreate(email="not-an-email", password="segredo")
    assert "Email inválido" in _messages(exc)


def test_cpf_normalized_to_digits():
    user = UserCreate(email="ana@example.com", password="segredo", cpf="123.456.789-01")
    assert user.cpf == "12345678901"


def test_blank_cpf_is_none():
    assert UserCreate(email="ana@example.com", password="segredo", cpf="  ").cpf is None


def test_cpf_wrong_length_rejected():
    with pytest.raises(ValidationError) as exc:
        UserCreate(email="ana@example.com", password="segredo", cpf="123")
    assert "CPF deve conter 11 dígitos" in _messages(exc)


def test_user_update_is_partial():
    update = UserUpdate(nome="Ana")
    assert update.model_fields_set == {"nome"}
    assert update.password is None


def test_login_requires_password():
    with pytest.raises(ValidationError):
        LoginRequest(email="ana@example.com", password="  ")


# --- communities ---------------------------------------------------------------

def test_join_code_normalized():
    assert CommunityJoin(codigo=" a1b2c3d4 ").codigo == "A1B2C3D4"


def test_join_code_too_short():
    with pytest.raises(ValidationError) as exc:
        CommunityJoin(codigo="abc")
    assert "pelo menos 6 caracteres" in _messages(exc)


def test_community_name_required():
    with pytest.raises(ValidationError):
        CommunityCreate(nome="   ")


# --- sessions ------------------------------------------------------------------

def test_session_window_validated():
    with pytest.raises(ValidationError) as exc:
        SessionCreate(
            titulo="Eleição",
            data_inicio=datetime(2026, 3, 2, tzinfo=timezone.utc),
            data_fim=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
    assert "Data de fim deve ser posterior à data de início" in _messages(exc)


def test_session_accepts_iso_strings():
    body = SessionCreate(
        titulo=" Eleição ",
        data_inicio="2026-03-01T09:00:00Z",
        data_fim="2026-03-01T18:00:00Z",
    )
    assert body.titulo == "Eleição"
    assert body.ativa is True
    assert body.comunidade_id is None


def test_session_update_checks_window_only_when_both_present():
    SessionUpdate(data_fim=datetime(2020, 1, 1, tzinfo=timezone.utc))
    with pytest.raises(ValidationError):
        SessionUpdate(
            data_inicio=datetime(2026, 3, 2, tzinfo=timezone.utc),
            data_fim=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )


# --- votes ---------------------------------------------------------------------

def test_vote_comment_blank_is_none():
    assert VoteCreate(sessao_id=1, projeto_id=2, comentario="   ").comentario is None


def test_vote_ids_must_be_positive():
    with pytest.raises(ValidationError):
        VoteCreate(sessao_id=0, projeto_id=2)
