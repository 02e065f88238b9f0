"""Admin Bootstrap — create (or promote) an ADMIN account from the command line.

Invariants:
    - Uses the same validation as the signup schema (email, password length, CPF)
    - Existing email is promoted to ADMIN and its password reset, never duplicated

Design Decisions:
    - Password read with getpass when not passed, so it stays out of shell history
    - Talks to the database through db/session.py (no FastAPI app involved)
"""

import argparse
import asyncio
import getpass
import logging
import sys

from pydantic import ValidationError
from sqlalchemy import select

from votecerto.config import get_settings
from votecerto.core.domain_types import UserRole
from votecerto.db.session import create_session_factory
from votecerto.infrastructure.security import hash_password
from votecerto.models.user import User
from votecerto.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="votecerto-create-admin",
        description="Cria ou promove um usuário administrador.",
    )
    parser.add_argument("email")
    parser.add_argument("--nome", default=None)
    parser.add_argument("--cpf", default=None)
    parser.add_argument(
        "--password", default=None,
        help="Senha (solicitada interativamente quando omitida)",
    )
    parser.add_argument(
        "--database-url", default=None,
        help="URL do banco (padrão: DATABASE_URL)",
    )
    return parser.parse_args(argv)


async def create_admin(data: UserCreate, database_url: str) -> tuple[int, bool]:
    """Returns (user id, created). created is False when an existing user was promoted."""
    factory = create_session_factory(database_url)
    try:
        async with factory() as db:
            result = await db.execute(select(User).where(User.email == data.email))
            user = result.scalar_one_or_none()
            created = user is None
            if created:
                user = User(email=data.email, nome=data.nome, cpf=data.cpf)
                db.add(user)
            user.tipo = UserRole.ADMIN.value
            user.password_hash = hash_password(data.password)
            await db.commit()
            await db.refresh(user)
            return user.id, created
    finally:
        await factory.kw["bind"].dispose()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = _parse_args(argv)
    password = args.password or getpass.getpass("Senha: ")
    try:
        data = UserCreate(
            email=args.email, password=password,
            tipo=UserRole.ADMIN, nome=args.nome, cpf=args.cpf,
        )
    except ValidationError as e:
        for error in e.errors():
            logger.error(error["msg"].removeprefix("Value error, "))
        return 1

    user_id, created = asyncio.run(create_admin(
        data, args.database_url or get_settings().database_url,
    ))
    action = "criado" if created else "promovido a ADMIN"
    logger.info(f"Usuário {data.email} {action} (id={user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
