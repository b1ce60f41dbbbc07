"""FastAPI authentication dependencies and the route access policy.

Every route declares the access level it needs through ``require_access``;
handlers never repeat role checks themselves. Authorization is resolved
before any target entity is loaded, so a denied caller cannot learn whether
the entity exists.
"""

import enum
from collections.abc import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import decode_token
from app.database import get_db
from app.errors import ForbiddenError, UnauthorizedError
from app.models.user import User
from app.services.user_service import get_user

# Missing credentials are reported as 401 by us, not as FastAPI's default 403
_bearer_scheme = HTTPBearer(auto_error=False)


class AccessLevel(str, enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


def _claims_from_token(token: str) -> dict | None:
    """Return the verified payload of an access token, or ``None`` if unusable."""
    try:
        payload = decode_token(token)
    except JWTError:
        return None

    # Only accept access tokens
    if payload.get("type") != "access":
        return None
    if not payload.get("sub"):
        return None
    return payload


async def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> dict:
    """Validate the Bearer token and return its claims.

    Raises:
        UnauthorizedError: If no token is sent or it is invalid, expired, or of the wrong type.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    claims = _claims_from_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedError()
    return claims


async def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Return the user the Bearer token belongs to.

    Raises:
        UnauthorizedError: If the token is unusable or no session was ever reported for its subject.
    """
    user = await get_user(db, str(claims["sub"]))
    if user is None:
        raise UnauthorizedError()
    return user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Return the current user only if they are an administrator.

    Raises:
        ForbiddenError: If the user is authenticated but not an admin.
    """
    if not user.is_admin:
        raise ForbiddenError()
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Optionally authenticate a user from a Bearer token.

    Returns ``None`` instead of raising when no usable token is provided, so
    public endpoints can still attribute requests to signed-in callers.
    """
    if credentials is None:
        return None

    claims = _claims_from_token(credentials.credentials)
    if claims is None:
        return None

    return await get_user(db, str(claims["sub"]))


_ACCESS_POLICY: dict[AccessLevel, Callable] = {
    AccessLevel.PUBLIC: get_optional_user,
    AccessLevel.AUTHENTICATED: get_current_user,
    AccessLevel.ADMIN: get_current_admin,
}


def require_access(level: AccessLevel) -> Callable:
    """Return the dependency enforcing ``level``.

    Usage::

        @router.delete("/{property_id}")
        async def delete(current_user: User = Depends(require_access(AccessLevel.ADMIN))):
            ...
    """
    return _ACCESS_POLICY[level]
