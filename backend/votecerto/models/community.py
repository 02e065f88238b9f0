"""Community ORM — named group joined through an invite code.

Invariants:
    - nome unique; codigo unique across all communities
    - criador_id nulled when the creator account is deleted
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base

NAME_CONSTRAINT = "uq_comunidade_nome"
CODE_CONSTRAINT = "uq_comunidade_codigo"


class Community(Base):
    """Community — owns memberships and sessions."""
    __tablename__ = "comunidades"
    __table_args__ = (
        UniqueConstraint("nome", name=NAME_CONSTRAINT),
        UniqueConstraint("codigo", name=CODE_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    descricao: Mapped[str | None] = mapped_column(Text, nullable=True)
    codigo: Mapped[str] = mapped_column(String(16), nullable=False)
    criador_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True,
    )
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
