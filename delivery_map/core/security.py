"""Shop-scoped bearer tokens for the admin surface."""

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from delivery_map.core.config import settings

bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Sign a token whose ``sub`` claim is the shop an admin session may act for."""
    issued_at: datetime = datetime.now(timezone.utc)
    lifetime: timedelta = expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    claims: dict[str, Any] = {"sub": subject, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_shop_token(shop: str) -> str:
    """Issue an admin token for one shop domain."""
    return create_access_token(shop.strip())


def decode_shop(token: str) -> str:
    """Return the shop a token was issued for, or raise 401."""
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as exc:
        raise _unauthorized("Could not validate credentials") from exc

    shop = claims.get("sub")
    if not isinstance(shop, str) or not shop.strip():
        raise _unauthorized("Invalid authentication token")
    return shop.strip()


def get_current_shop(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Resolve the authenticated shop from the Authorization header."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return decode_shop(credentials.credentials)
