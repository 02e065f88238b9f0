"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions escaping a request mapped to VoteCertoError (core/errors.py)
    - SQLite connections run with PRAGMA foreign_keys=ON so ON DELETE CASCADE holds in tests too
    - Unique-constraint writes go through insert_unique()/commit_unique(): the outcome is a
      tagged result (Created | Conflict), never a pre-check

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Tagged result over raising IntegrityError: each service decides which 409 message a
      violated constraint deserves (vote vs. membership vs. email)
    - Conflicts classified by constraint name (asyncpg constraint_name, sqlite column list),
      never by searching the driver message: it echoes the offending value
"""

import logging
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, Generic, TypeVar

from sqlalchemy import UniqueConstraint, event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from votecerto.core.errors import ConflictError, DatabaseError
from votecerto.db.base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection (no-op elsewhere)."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        pool_kwargs = {}
        if not database_url.startswith("sqlite"):
            pool_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **pool_kwargs,
        )
        enable_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"DB integrity error: {e}")
            raise ConflictError("Registro duplicado ou referência inválida")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session


# ─── Unique-constraint writes ───────────────────────────────────

@dataclass(frozen=True)
class Created(Generic[T]):
    """Row committed."""
    entity: T


@dataclass(frozen=True)
class Conflict:
    """Commit rejected by a uniqueness (or FK) constraint.

    constraint is the violated constraint's name, None when it cannot be told
    (foreign-key failures, unnamed constraints).
    """
    constraint: str | None
    detail: str

    def involves(self, constraint: str) -> bool:
        return self.constraint == constraint


_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (.+)")


def _named_unique_constraint(columns: set[str]) -> str | None:
    """Map sqlite's "table.column" tokens back to the declared constraint name."""
    for table in Base.metadata.tables.values():
        for constraint in table.constraints:
            if not isinstance(constraint, UniqueConstraint):
                continue
            if {f"{table.name}.{c.name}" for c in constraint.columns} == columns:
                return constraint.name
    return None


def violated_constraint(error: IntegrityError) -> str | None:
    """Name of the constraint behind an IntegrityError.

    asyncpg reports it as constraint_name on the driver exception (wrapped by the
    SQLAlchemy adapter, hence __cause__); sqlite only lists the columns.
    Never derived from the message text around the offending value.
    """
    for candidate in (error.orig, getattr(error.orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    first_line = next(iter(str(error.orig).splitlines()), "")
    match = _SQLITE_UNIQUE.match(first_line)
    if match is None:
        return None
    return _named_unique_constraint(
        {token.strip() for token in match.group(1).split(",")},
    )


def conflict_from(error: IntegrityError) -> Conflict:
    return Conflict(constraint=violated_constraint(error), detail=str(error.orig))


async def commit_unique(db: AsyncSession) -> Conflict | None:
    """Commit pending changes; return Conflict instead of raising on constraint violation."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        return conflict_from(e)
    return None


async def insert_unique(db: AsyncSession, entity: T) -> Created[T] | Conflict:
    """Insert one row and commit. The database decides uniqueness, not a pre-check."""
    db.add(entity)
    conflict = await commit_unique(db)
    if conflict is not None:
        return conflict
    await db.refresh(entity)
    return Created(entity)
