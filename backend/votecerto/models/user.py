"""User ORM — accounts with role, credential hash and optional national-ID.

Invariants:
    - email unique; cpf unique when present (NULLs do not collide)
    - Unique constraints carry explicit names: conflicts are classified by name
    - tipo is one of ADMIN | GESTOR | PARTICIPANTE (core.domain_types.UserRole)
    - password_hash is an argon2 hash, never a plain password

Design Decisions:
    - Column names in pt-BR: they are the API field names as well
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base

EMAIL_CONSTRAINT = "uq_usuario_email"
CPF_CONSTRAINT = "uq_usuario_cpf"


class User(Base):
    """User account."""
    __tablename__ = "usuarios"
    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
        UniqueConstraint("cpf", name=CPF_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    tipo: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PARTICIPANTE",
    )
    nome: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cpf: Mapped[str | None] = mapped_column(String(11), nullable=True)
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    ultimo_acesso: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
