"""Boundary Protocols — structural contracts for ORM rows consumed by the pure core.

Invariants:
    - Core NEVER imports from models/ — ORM rows reach core through these Protocols
    - Protocols list only the attributes core reads

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy them without inheritance;
      tests pass SimpleNamespace/dataclass fakes
"""

from datetime import datetime
from typing import Protocol


class VotingSessionLike(Protocol):
    """Structural contract for voting session rows."""
    id: int
    titulo: str
    ativa: bool
    data_inicio: datetime
    data_fim: datetime
    criador_id: int | None
    comunidade_id: int | None


class CommunityLike(Protocol):
    """Structural contract for community rows."""
    id: int
    nome: str
    codigo: str
    criador_id: int | None


class ProjectLike(Protocol):
    """Structural contract for project rows."""
    id: int
    titulo: str
    sessao_id: int


class VoteLike(Protocol):
    """Structural contract for vote rows."""
    id: int
    usuario_id: int
    sessao_id: int
    projeto_id: int
