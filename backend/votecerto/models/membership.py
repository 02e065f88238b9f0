"""Membership ORM — join row between a user and a community.

Invariants:
    - At most one row per (usuario_id, comunidade_id), enforced by unique constraint
    - Removed with either side (ON DELETE CASCADE)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base


class Membership(Base):
    """User ↔ Community membership."""
    __tablename__ = "participantes"
    __table_args__ = (
        UniqueConstraint("usuario_id", "comunidade_id", name="uq_participante_comunidade"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False,
    )
    comunidade_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("comunidades.id", ondelete="CASCADE"), nullable=False,
    )
    data_ingresso: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
