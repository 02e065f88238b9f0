"""User Handlers — login, identity resolution, signup and account management.

Invariants:
    - Login failure never reveals which of email/password was wrong
    - Identity resolved from the DB row, so deleted users and role changes apply immediately
    - Email/CPF uniqueness decided by the unique constraints; the conflict names the column

Design Decisions:
    - Authorization in core/user_rules.py; this module only loads rows and writes
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.core.domain_types import Identity, UserId, UserRole
from votecerto.core.errors import (
    AuthenticationError, ConflictError, ResourceNotFoundError,
)
from votecerto.core.user_rules import (
    check_user_access, check_user_create, check_user_delete,
    check_user_list, check_user_update,
)
from votecerto.infrastructure.database import Conflict, commit_unique, insert_unique
from votecerto.infrastructure.security import hash_password, verify_password
from votecerto.models.user import CPF_CONSTRAINT, User
from votecerto.schemas.user import UserCreate, UserUpdate
from votecerto.services.serializers import serialize_user

logger = logging.getLogger(__name__)


def _conflict_error(conflict: Conflict) -> ConflictError:
    if conflict.involves(CPF_CONSTRAINT):
        return ConflictError("Já existe um usuário com este CPF")
    return ConflictError("Já existe um usuário com este email")


class UserHandlers:
    """Account lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("Usuário não encontrado")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and stamp ultimo_acesso."""
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed", extra={"path": "/api/auth/login"})
            raise AuthenticationError("Email ou senha inválidos")
        user.ultimo_acesso = datetime.now(timezone.utc)
        await self.db.commit()
        logger.info("Login succeeded", extra={"user_id": user.id, "role": user.tipo})
        return user

    async def resolve_identity(self, user_id: int) -> Identity:
        user = await self.db.get(User, user_id)
        if user is None:
            raise AuthenticationError("Usuário não encontrado")
        return Identity(
            user_id=UserId(user.id), email=user.email, role=UserRole(user.tipo),
        )

    async def me(self, identity: Identity) -> dict:
        user = await self.db.get(User, identity.user_id)
        if user is None:
            raise AuthenticationError("Usuário não encontrado")
        return serialize_user(user, include_cpf=True)

    async def create(self, identity: Identity | None, body: UserCreate) -> dict:
        check_user_create(identity, body.tipo)
        outcome = await insert_unique(self.db, User(
            email=body.email,
            password_hash=hash_password(body.password),
            tipo=body.tipo.value,
            nome=body.nome,
            cpf=body.cpf,
        ))
        if isinstance(outcome, Conflict):
            raise _conflict_error(outcome)
        user = outcome.entity
        logger.info(
            "User created",
            extra={"user_id": user.id, "role": user.tipo},
        )
        return serialize_user(user, include_cpf=True)

    async def list_users(self, identity: Identity) -> list[dict]:
        check_user_list(identity)
        result = await self.db.execute(select(User).order_by(User.id))
        return [serialize_user(u) for u in result.scalars()]

    async def get(self, identity: Identity, user_id: int) -> dict:
        check_user_access(identity, user_id)
        return serialize_user(await self._get(user_id), include_cpf=True)

    async def update(
        self, identity: Identity, user_id: int, body: UserUpdate,
    ) -> dict:
        check_user_access(identity, user_id)
        user = await self._get(user_id)
        changes_role = body.tipo is not None and body.tipo.value != user.tipo
        must_verify = check_user_update(
            identity, user_id,
            changes_role=changes_role,
            changes_password=body.password is not None,
            has_current_password=bool(body.senha_atual),
        )
        if must_verify and not verify_password(body.senha_atual, user.password_hash):
            raise AuthenticationError("Senha atual incorreta")

        fields = body.model_fields_set
        if body.email is not None:
            user.email = body.email
        if body.password is not None:
            user.password_hash = hash_password(body.password)
        if changes_role:
            user.tipo = body.tipo.value
        if "nome" in fields:
            user.nome = body.nome
        if "cpf" in fields:
            user.cpf = body.cpf

        conflict = await commit_unique(self.db)
        if conflict is not None:
            raise _conflict_error(conflict)
        await self.db.refresh(user)
        return serialize_user(user, include_cpf=True)

    async def delete(self, identity: Identity, user_id: int) -> None:
        check_user_delete(identity, user_id)
        user = await self._get(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.warning(
            "User deleted", extra={"user_id": identity.user_id, "role": identity.role.value},
        )
