"""Service test fixtures — async DB + FastAPI test client + row factories.

Invariants:
    - Every test gets a fresh file-backed SQLite database (tmp_path)
    - Foreign keys enforced, so ON DELETE CASCADE behaves as in production
    - get_db dependency overridden to use the test DB; db_manager patched for readiness
    - Callers authenticate with an explicit auth cookie header built from a real token

Design Decisions:
    - File database over :memory: — concurrent requests need separate connections
      to race on the unique constraints
    - Rows seeded through the ORM, not the API: each test states only what it exercises
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import votecerto.infrastructure.database as db_module
from votecerto.config import get_settings
from votecerto.db.base import Base
from votecerto.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from votecerto.infrastructure.security import create_access_token, hash_password
from votecerto.main import app
from votecerto.models.community import Community
from votecerto.models.membership import Membership
from votecerto.models.project import Project
from votecerto.models.user import User
from votecerto.models.vote import Vote
from votecerto.models.voting_session import VotingSession

DEFAULT_PASSWORD = "senha123"


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'votecerto.db'}", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.email, user.tipo)
    return {"Cookie": f"{get_settings().auth_cookie_name}={token}"}


class Seeder:
    """Inserts rows directly; each call commits in its own DB session."""

    def __init__(self, factory: async_sessionmaker):
        self.factory = factory

    async def _save(self, row):
        async with self.factory() as db:
            db.add(row)
            await db.commit()
            await db.refresh(row)
            return row

    async def user(
        self, tipo: str = "PARTICIPANTE", email: str | None = None,
        nome: str | None = None, cpf: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        return await self._save(User(
            email=email or f"{tipo.lower()}-{uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
            tipo=tipo, nome=nome, cpf=cpf,
        ))

    async def community(
        self, creator: User, members: tuple[User, ...] = (), nome: str | None = None,
    ) -> Community:
        community = await self._save(Community(
            nome=nome or f"Comunidade {uuid4().hex[:6]}",
            codigo=uuid4().hex[:8].upper(),
            criador_id=creator.id,
        ))
        for member in members:
            await self.join(member, community)
        return community

    async def join(self, user: User, community: Community) -> Membership:
        return await self._save(
            Membership(usuario_id=user.id, comunidade_id=community.id),
        )

    async def session(
        self, creator: User, community: Community | None = None,
        starts_in: timedelta = timedelta(hours=-1),
        ends_in: timedelta = timedelta(hours=1),
        ativa: bool = True, titulo: str | None = None,
    ) -> VotingSession:
        now = datetime.now(timezone.utc)
        return await self._save(VotingSession(
            titulo=titulo or f"Sessão {uuid4().hex[:6]}",
            data_inicio=now + starts_in,
            data_fim=now + ends_in,
            ativa=ativa,
            criador_id=creator.id,
            comunidade_id=community.id if community else None,
        ))

    async def project(self, session: VotingSession, titulo: str | None = None) -> Project:
        return await self._save(Project(
            titulo=titulo or f"Projeto {uuid4().hex[:6]}",
            sessao_id=session.id,
        ))

    async def vote(self, user: User, project: Project, comentario: str | None = None) -> Vote:
        return await self._save(Vote(
            usuario_id=user.id, sessao_id=project.sessao_id,
            projeto_id=project.id, comentario=comentario,
        ))


@pytest.fixture
def seed(test_session_factory):
    return Seeder(test_session_factory)


@pytest.fixture
async def admin(seed):
    return await seed.user("ADMIN", email="admin@example.com", nome="Admin")


@pytest.fixture
async def manager(seed):
    return await seed.user("GESTOR", email="gestor@example.com", nome="Gestor")


@pytest.fixture
async def participant(seed):
    return await seed.user(
        "PARTICIPANTE", email="ana@example.com", nome="Ana", cpf="12345678901",
    )


@pytest.fixture
async def community(seed, manager, participant):
    """Community created by the manager with the participant as member."""
    return await seed.community(manager, members=(manager, participant))


@pytest.fixture
async def live_session(seed, manager, community):
    return await seed.session(manager, community)


@pytest.fixture
async def projects(seed, live_session):
    return [
        await seed.project(live_session, "Praça nova"),
        await seed.project(live_session, "Ciclovia"),
    ]


@pytest.fixture
def auth():
    """auth(user) -> headers carrying that user's auth cookie."""
    return auth_headers
