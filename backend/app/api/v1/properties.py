"""Property API routes — public search and admin-managed listings."""

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AccessLevel, FileStorage, get_db, get_file_storage, require_access
from app.errors import AppError, NotFoundError
from app.models.property import Property
from app.models.user import User
from app.schemas.common import parse_input
from app.schemas.property import PropertyCreate, PropertyFilters, PropertyResponse, PropertyUpdate
from app.services import property_service

router = APIRouter(prefix="/api/properties", tags=["properties"])


async def property_form_fields(
    title: str | None = Form(None),
    description: str | None = Form(None),
    listing_type: str | None = Form(None, alias="type"),
    property_type: str | None = Form(None, alias="propertyType"),
    price: str | None = Form(None),
    surface: str | None = Form(None),
    rooms: str | None = Form(None),
    bedrooms: str | None = Form(None),
    address: str | None = Form(None),
    city: str | None = Form(None),
    postal_code: str | None = Form(None, alias="postalCode"),
    latitude: str | None = Form(None),
    longitude: str | None = Form(None),
    features: str | None = Form(None),
    available_from: str | None = Form(None, alias="availableFrom"),
    property_status: str | None = Form(None, alias="status"),
    featured: str | None = Form(None),
    existing_images: str | None = Form(None, alias="existingImages"),
) -> dict[str, str]:
    """Collect the raw string fields of a multipart property form, keyed by their wire names.

    Parsing into numbers, lists and booleans happens in the schemas so that
    malformed values surface as validation errors, never as silent defaults.
    """
    fields = {
        "title": title,
        "description": description,
        "type": listing_type,
        "propertyType": property_type,
        "price": price,
        "surface": surface,
        "rooms": rooms,
        "bedrooms": bedrooms,
        "address": address,
        "city": city,
        "postalCode": postal_code,
        "latitude": latitude,
        "longitude": longitude,
        "features": features,
        "availableFrom": available_from,
        "status": property_status,
        "featured": featured,
        "existingImages": existing_images,
    }
    return {name: value for name, value in fields.items() if value is not None}


@router.get(
    "",
    response_model=list[PropertyResponse],
    summary="Search properties",
)
async def list_properties(
    listing_type: str | None = Query(None, alias="type"),
    property_type: str | None = Query(None, alias="propertyType"),
    city: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    min_surface: str | None = Query(None, alias="minSurface"),
    max_surface: str | None = Query(None, alias="maxSurface"),
    rooms: str | None = Query(None),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[Property]:
    """Return properties matching every supplied filter, newest first."""
    filters = PropertyFilters.from_query(
        {
            "type": listing_type,
            "propertyType": property_type,
            "city": city,
            "minPrice": min_price,
            "maxPrice": max_price,
            "minSurface": min_surface,
            "maxSurface": max_surface,
            "rooms": rooms,
            "limit": limit,
            "offset": offset,
        }
    )
    return await property_service.search_properties(db, filters)


@router.get(
    "/featured",
    response_model=list[PropertyResponse],
    summary="List featured properties",
)
async def list_featured_properties(
    limit: int | None = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
) -> list[Property]:
    """Return the newest available properties flagged as featured."""
    return await property_service.get_featured_properties(db, limit)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get a property by ID",
)
async def get_property(
    property_id: int,
    db: AsyncSession = Depends(get_db),
) -> Property:
    """Retrieve a single property. Returns 404 if not found."""
    prop = await property_service.get_property(db, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a property",
)
async def create_property(
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
    fields: dict[str, str] = Depends(property_form_fields),
    images: list[UploadFile] | None = File(None),
    storage: FileStorage = Depends(get_file_storage),
    db: AsyncSession = Depends(get_db),
) -> Property:
    """Create a listing from multipart form fields and uploaded images."""
    fields.pop("existingImages", None)
    data = parse_input(PropertyCreate, fields)
    stored = await storage.save_all(images or [])
    try:
        return await property_service.create_property(db, data, stored)
    except AppError:
        storage.discard(stored)
        raise


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update a property",
)
async def update_property(
    property_id: int,
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
    fields: dict[str, str] = Depends(property_form_fields),
    images: list[UploadFile] | None = File(None),
    storage: FileStorage = Depends(get_file_storage),
    db: AsyncSession = Depends(get_db),
) -> Property:
    """Partially update a listing. Uploaded images are appended to ``existingImages``."""
    data = parse_input(PropertyUpdate, fields)
    if await property_service.get_property(db, property_id) is None:
        raise NotFoundError("Property not found")

    stored = await storage.save_all(images or [])
    try:
        return await property_service.update_property(db, property_id, data, stored)
    except AppError:
        storage.discard(stored)
        raise


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a property",
)
async def delete_property(
    property_id: int,
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a listing. Its favorites and contact requests are left in place."""
    await property_service.delete_property(db, property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
