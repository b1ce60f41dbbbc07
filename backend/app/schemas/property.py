"""Pydantic v2 request/response schemas for property endpoints."""

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import Field, field_validator

from app.errors import InvalidFilterError
from app.models.property import LISTING_TYPES, PROPERTY_STATUSES, PROPERTY_TYPES
from app.schemas.common import CamelModel, blank_as_none, enum_pattern, parse_input

_LISTING_TYPE = enum_pattern(LISTING_TYPES)
_PROPERTY_TYPE = enum_pattern(PROPERTY_TYPES)
_STATUS = enum_pattern(PROPERTY_STATUSES)


def _decode_string_list(value):
    """Multipart forms carry lists as JSON-encoded strings; blank means absent."""
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValueError("must be a JSON-encoded list of strings") from exc
    return value


def _to_naive_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ---------------------------------------------------------------------------
# Search filters
# ---------------------------------------------------------------------------


class PropertyFilters(CamelModel):
    """Search criteria for the property listing. Every field is optional."""

    type: str | None = Field(None, pattern=_LISTING_TYPE)
    property_type: str | None = Field(None, pattern=_PROPERTY_TYPE)
    city: str | None = Field(None, max_length=100)
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    min_surface: int | None = Field(None, ge=0)
    max_surface: int | None = Field(None, ge=0)
    rooms: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)
    offset: int | None = Field(None, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        return blank_as_none(value)

    @field_validator("city")
    @classmethod
    def _strip_city(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @classmethod
    def from_query(cls, params: Mapping[str, str | None]) -> "PropertyFilters":
        """Parse raw query-string values keyed by their camelCase query names.

        Validation errors report ``loc`` with those same names, e.g. ``["minPrice"]``.

        Raises:
            InvalidFilterError: If any supplied value is malformed, e.g. a
                non-numeric ``minPrice`` or an unknown ``propertyType``.
        """
        supplied = {key: value for key, value in params.items() if value is not None}
        return parse_input(cls, supplied, InvalidFilterError)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(CamelModel):
    """Schema for creating a property from multipart form fields."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: str = Field(..., pattern=_LISTING_TYPE)
    property_type: str = Field(..., pattern=_PROPERTY_TYPE)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    surface: int = Field(..., gt=0)
    rooms: int = Field(..., ge=1)
    bedrooms: int | None = Field(None, ge=0)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=10)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    features: list[str] = Field(default_factory=list)
    available_from: datetime | None = None
    status: str = Field("available", pattern=_STATUS)
    featured: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        return blank_as_none(value)

    @field_validator("features", mode="before")
    @classmethod
    def _features_from_json(cls, value):
        decoded = _decode_string_list(value)
        return [] if decoded is None else decoded

    @field_validator("available_from")
    @classmethod
    def _naive_available_from(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class PropertyUpdate(CamelModel):
    """Schema for partially updating a property. All fields optional.

    ``existing_images`` is the client's view of the images to keep; newly
    uploaded files are appended after it.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    type: str | None = Field(None, pattern=_LISTING_TYPE)
    property_type: str | None = Field(None, pattern=_PROPERTY_TYPE)
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    surface: int | None = Field(None, gt=0)
    rooms: int | None = Field(None, ge=1)
    bedrooms: int | None = Field(None, ge=0)
    address: str | None = Field(None, min_length=1)
    city: str | None = Field(None, min_length=1, max_length=100)
    postal_code: str | None = Field(None, min_length=1, max_length=10)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    features: list[str] | None = None
    available_from: datetime | None = None
    status: str | None = Field(None, pattern=_STATUS)
    featured: bool | None = None
    existing_images: list[str] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        return blank_as_none(value)

    @field_validator("features", "existing_images", mode="before")
    @classmethod
    def _lists_from_json(cls, value):
        return _decode_string_list(value)

    @field_validator("available_from")
    @classmethod
    def _naive_available_from(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyResponse(CamelModel):
    """Listing returned from the API."""

    id: int
    title: str
    description: str
    type: str
    property_type: str
    price: Decimal
    surface: int
    rooms: int
    bedrooms: int | None = None
    address: str
    city: str
    postal_code: str
    latitude: Decimal | None = None
    longitude: Decimal | None = None
    images: list[str] = []
    features: list[str] = []
    available_from: datetime | None = None
    status: str
    featured: bool
    closed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
