"""Admin dashboard API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AccessLevel, get_db, require_access
from app.models.user import User
from app.schemas.stats import StatsResponse
from app.services import stats_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=StatsResponse, summary="Dashboard counters")
async def get_stats(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
) -> StatsResponse:
    """Return property, user, monthly contact-request and monthly revenue totals."""
    return await stats_service.get_stats(db)
