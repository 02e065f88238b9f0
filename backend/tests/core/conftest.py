"""Core test fixtures — identities and row fakes (no DB, no IO)."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from votecerto.core.domain_types import Identity, UserId, UserRole

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def admin():
    return Identity(user_id=UserId(1), email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def manager():
    return Identity(user_id=UserId(2), email="gestor@example.com", role=UserRole.GESTOR)


@pytest.fixture
def participant():
    return Identity(user_id=UserId(3), email="ana@example.com", role=UserRole.PARTICIPANTE)


@pytest.fixture
def live_session():
    return SimpleNamespace(
        id=10, titulo="Orçamento 2026", ativa=True,
        data_inicio=NOW - timedelta(hours=1), data_fim=NOW + timedelta(hours=1),
        criador_id=2, comunidade_id=5,
    )


@pytest.fixture
def project(live_session):
    return SimpleNamespace(id=100, titulo="Praça nova", sessao_id=live_session.id)


@pytest.fixture
def community():
    return SimpleNamespace(id=5, nome="Bairro Centro", codigo="A1B2C3D4", criador_id=2)
