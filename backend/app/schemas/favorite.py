"""Pydantic v2 request/response schemas for favorite endpoints."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.property import PropertyResponse


class FavoriteCreate(CamelModel):
    """Body of ``POST /api/favorites``."""

    property_id: int = Field(..., ge=1)


class FavoriteResponse(CamelModel):
    id: int
    user_id: str
    property_id: int
    created_at: datetime


class FavoriteWithPropertyResponse(FavoriteResponse):
    """A favorite together with the listing it points at."""

    property: PropertyResponse


class FavoriteCheckResponse(CamelModel):
    is_favorite: bool
