"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Uniqueness invariants live here as constraints, not in service code
    - Deletions cascade through ON DELETE CASCADE foreign keys

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/alembic run
    - No relationship() collections: services query explicitly, which keeps async loading
      predictable (no lazy loads outside the greenlet)
"""

from votecerto.models.user import User  # noqa: F401
from votecerto.models.community import Community  # noqa: F401
from votecerto.models.membership import Membership  # noqa: F401
from votecerto.models.voting_session import VotingSession  # noqa: F401
from votecerto.models.project import Project  # noqa: F401
from votecerto.models.vote import Vote  # noqa: F401
