"""Pydantic v2 request/response schemas for contact request endpoints."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.models.contact_request import CONTACT_REQUEST_STATUSES, CONTACT_REQUEST_TYPES
from app.schemas.common import CamelModel, enum_pattern
from app.schemas.property import PropertyResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ContactRequestCreate(CamelModel):
    """Schema for a public inquiry about a property."""

    property_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    message: str = Field(..., min_length=1)
    type: str = Field(..., pattern=enum_pattern(CONTACT_REQUEST_TYPES))


class ContactRequestStatusUpdate(CamelModel):
    """Body of ``PUT /api/contact-requests/{id}/status``."""

    status: str = Field(..., pattern=enum_pattern(CONTACT_REQUEST_STATUSES))


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ContactRequestResponse(CamelModel):
    id: int
    property_id: int
    user_id: str | None = None
    name: str
    email: str
    phone: str | None = None
    message: str
    type: str
    status: str
    created_at: datetime


class ContactRequestWithPropertyResponse(ContactRequestResponse):
    """A contact request joined with its property, as shown on the admin dashboard."""

    property: PropertyResponse
