"""VotingSession ORM — a time-boxed voting event, scoped to a community or global.

Invariants:
    - comunidade_id NULL means a global session
    - "Live" is derived (core/session_lifecycle.py), never stored
    - Projects and votes removed with the session (ON DELETE CASCADE)

Design Decisions:
    - Named VotingSession to avoid clashing with SQLAlchemy's Session
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base


class VotingSession(Base):
    """Voting session — owns projects and votes."""
    __tablename__ = "sessoes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao: Mapped[str | None] = mapped_column(Text, nullable=True)
    data_inicio: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    data_fim: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ativa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    criador_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True,
    )
    comunidade_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comunidades.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
