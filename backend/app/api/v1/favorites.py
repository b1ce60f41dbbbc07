"""Favorites API routes — scoped to the authenticated caller."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AccessLevel, get_db, require_access
from app.models.favorite import Favorite
from app.models.user import User
from app.schemas.favorite import (
    FavoriteCheckResponse,
    FavoriteCreate,
    FavoriteResponse,
    FavoriteWithPropertyResponse,
)
from app.services import favorite_service

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get(
    "",
    response_model=list[FavoriteWithPropertyResponse],
    summary="List the caller's favorites",
)
async def list_favorites(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.AUTHENTICATED)),
) -> list[Favorite]:
    """Return the caller's saved properties, most recently saved first."""
    return await favorite_service.list_favorites(db, current_user.id)


@router.post(
    "",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite",
)
async def add_favorite(
    body: FavoriteCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.AUTHENTICATED)),
) -> Favorite:
    """Save a property. Saving an already-saved property returns the existing favorite with 200."""
    favorite, created = await favorite_service.add_favorite(db, current_user.id, body.property_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return favorite


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a favorite",
)
async def remove_favorite(
    property_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.AUTHENTICATED)),
) -> Response:
    """Unsave a property. Removing a favorite that does not exist still returns 204."""
    await favorite_service.remove_favorite(db, current_user.id, property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{property_id}/check",
    response_model=FavoriteCheckResponse,
    summary="Check whether a property is a favorite",
)
async def check_favorite(
    property_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.AUTHENTICATED)),
) -> FavoriteCheckResponse:
    is_favorite = await favorite_service.is_favorite(db, current_user.id, property_id)
    return FavoriteCheckResponse(is_favorite=is_favorite)
