"""Security — password hashing (Argon2id) and signed auth tokens (JWT HS256).

Invariants:
    - Plain passwords never stored or logged; only argon2 hashes persist
    - verify_password never raises: any mismatch or malformed hash is False
    - Tokens carry sub (user id as str), email, tipo, iat, exp; expiry enforced on decode
    - decode_access_token raises AuthenticationError, never a library exception

Design Decisions:
    - argon2-cffi PasswordHasher with library defaults (memory-hard, salted, self-describing)
    - python-jose for JWT: HS256 with the secret from settings
    - Token role is informational; the request dependency re-reads the user row so
      deleted users and role changes take effect immediately
"""

from datetime import datetime, timedelta, timezone

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from votecerto.config import get_settings
from votecerto.core.errors import AuthenticationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(
    user_id: int, email: str, tipo: str,
    expires_delta: timedelta | None = None,
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.jwt_expires_days))
    claims = {
        "sub": str(user_id),
        "email": email,
        "tipo": tipo,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Validate signature and expiry. Returns the claims dict."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise AuthenticationError("Token inválido ou expirado")
    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise AuthenticationError("Token inválido ou expirado")
    return payload
