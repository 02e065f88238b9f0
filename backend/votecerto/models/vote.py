"""Vote ORM — one participant's choice of project within a session.

Invariants:
    - At most one vote per (usuario_id, sessao_id): unique constraint, the only arbiter
      of double voting (concurrent inserts race, exactly one commits)
    - projeto_id belongs to sessao_id (checked by core/vote_eligibility.py before insert)

Design Decisions:
    - sessao_id denormalized on the vote: the uniqueness rule needs it, and results
      group by session without joining projects
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from votecerto.db.base import Base


class Vote(Base):
    """Single vote."""
    __tablename__ = "votos"
    __table_args__ = (
        UniqueConstraint("usuario_id", "sessao_id", name="uq_voto_usuario_sessao"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False,
    )
    sessao_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sessoes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    projeto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projetos.id", ondelete="CASCADE"), nullable=False,
    )
    comentario: Mapped[str | None] = mapped_column(Text, nullable=True)
    data_voto: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
