"""Project ORM — a candidate option inside exactly one session.

Invariants:
    - Belongs to one session (sessao_id FK, cascade delete)
    - titulo unique within its session
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base


class Project(Base):
    """Candidate option."""
    __tablename__ = "projetos"
    __table_args__ = (
        UniqueConstraint("sessao_id", "titulo", name="uq_projeto_titulo_sessao"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    descricao_detalhada: Mapped[str | None] = mapped_column(Text, nullable=True)
    autor_responsavel: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sessao_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sessoes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
