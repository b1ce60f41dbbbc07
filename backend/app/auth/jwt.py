"""JWT bearer token creation and verification.

Tokens are issued by the identity provider and signed with the shared
secret. ``create_access_token`` exists for local tooling (seed script, tests)
that needs to mint tokens the same way the provider does.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from app.config import settings

# Optional claims copied onto the local user record when a session is reported
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token.

    Args:
        data: Payload data. Must include ``sub`` (the user id); may include
            any of ``PROFILE_CLAIMS``.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_access_token_expire_minutes`` minutes.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))
    to_encode.update({"exp": expire, "iat": now, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
