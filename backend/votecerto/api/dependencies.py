"""Request Dependencies — auth cookie to Identity, and the request clock.

Invariants:
    - Missing, invalid or expired token -> 401; token for a deleted user -> 401
    - Role taken from the user row, not from the token claims

Design Decisions:
    - Cookie transport (HttpOnly) so browser clients never touch the token
    - utc_now as a dependency: one timestamp per request, overridable in tests
"""

from datetime import datetime, timezone

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.config import get_settings
from votecerto.core.domain_types import Identity
from votecerto.core.errors import AuthenticationError
from votecerto.infrastructure.database import get_db
from votecerto.infrastructure.security import decode_access_token
from votecerto.services.handle_users import UserHandlers


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def _identity_from_token(token: str, db: AsyncSession) -> Identity:
    payload = decode_access_token(token)
    return await UserHandlers(db).resolve_identity(int(payload["sub"]))


async def get_current_identity(
    request: Request, db: AsyncSession = Depends(get_db),
) -> Identity:
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        raise AuthenticationError()
    return await _identity_from_token(token, db)


async def get_optional_identity(
    request: Request, db: AsyncSession = Depends(get_db),
) -> Identity | None:
    """Anonymous callers allowed (signup); a present but bad token still fails."""
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        return None
    return await _identity_from_token(token, db)
