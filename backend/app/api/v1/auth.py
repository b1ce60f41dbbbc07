"""Auth API routes — session reporting and the current user profile.

Identity is issued by an external provider; these routes only mirror the
token's subject into the local ``users`` table.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AccessLevel, get_db, get_token_claims, require_access
from app.auth.jwt import PROFILE_CLAIMS
from app.models.user import User
from app.schemas.user import UserResponse
from app.services import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/session", response_model=UserResponse, summary="Report a provider session")
async def report_session(
    claims: dict = Depends(get_token_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Create or refresh the local user record from the token's claims."""
    profile = {name: claims.get(name) for name in PROFILE_CLAIMS}
    return await user_service.upsert_user(db, str(claims["sub"]), **profile)


@router.get("/user", response_model=UserResponse, summary="Current user")
async def get_current_user_profile(
    current_user: User = Depends(require_access(AccessLevel.AUTHENTICATED)),
) -> User:
    return current_user
