"""Admin bootstrap CLI — creates or promotes, validates like signup."""

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

import votecerto.models  # noqa: F401  (register tables on Base.metadata)
from votecerto.db.base import Base
from votecerto.infrastructure.security import hash_password, verify_password
from votecerto.models.user import User
from votecerto.scripts.create_admin import main


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "admin.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


def _users(path) -> list[User]:
    engine = create_engine(f"sqlite:///{path}")
    with Session(engine) as db:
        users = list(db.scalars(select(User)))
    engine.dispose()
    return users


def test_creates_admin(db_path):
    code = main([
        "root@example.com", "--password", "segredo1", "--nome", "Raiz",
        "--database-url", f"sqlite+aiosqlite:///{db_path}",
    ])
    assert code == 0
    [user] = _users(db_path)
    assert user.tipo == "ADMIN"
    assert user.nome == "Raiz"
    assert verify_password("segredo1", user.password_hash)


def test_promotes_existing_user(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    with Session(engine) as db:
        db.add(User(
            email="ana@example.com", password_hash=hash_password("antiga1"),
            tipo="PARTICIPANTE",
        ))
        db.commit()
    engine.dispose()

    code = main([
        "ana@example.com", "--password", "nova123",
        "--database-url", f"sqlite+aiosqlite:///{db_path}",
    ])
    assert code == 0
    [user] = _users(db_path)
    assert user.tipo == "ADMIN"
    assert verify_password("nova123", user.password_hash)


def test_rejects_short_password(db_path):
    code = main([
        "root@example.com", "--password", "123",
        "--database-url", f"sqlite+aiosqlite:///{db_path}",
    ])
    assert code == 1
    assert _users(db_path) == []
