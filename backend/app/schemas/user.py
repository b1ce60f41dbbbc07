"""Pydantic v2 schemas for user records."""

from datetime import datetime

from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Public user profile information."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    is_admin: bool
    created_at: datetime
    updated_at: datetime
