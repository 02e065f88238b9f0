"""Auth Routes — cookie-based login, logout and current-user lookup.

Invariants:
    - Token set as HttpOnly cookie (SameSite=Lax, Secure per settings), 7-day default lifetime
    - Login failures answer 401 with one generic message
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from votecerto.api.dependencies import get_current_identity
from votecerto.config import get_settings
from votecerto.core.domain_types import Identity
from votecerto.infrastructure.database import get_db
from votecerto.infrastructure.security import create_access_token
from votecerto.schemas.auth import LoginRequest
from votecerto.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest, response: Response, db: AsyncSession = Depends(get_db),
):
    user = await UserHandlers(db).authenticate(body.email, body.password)
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=create_access_token(user.id, user.email, user.tipo),
        max_age=settings.jwt_expires_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return {
        "data": {"id": user.id, "email": user.email, "tipo": user.tipo},
        "message": "Login realizado com sucesso",
    }


@router.delete("/logout")
async def logout(response: Response):
    response.delete_cookie(get_settings().auth_cookie_name, path="/")
    return {"message": "Logout realizado com sucesso"}


@router.get("/me")
async def me(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return {"data": await UserHandlers(db).me(identity)}
