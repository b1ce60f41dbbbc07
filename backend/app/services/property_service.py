"""Property service — search query composition and listing CRUD."""

import logging

from sqlalchemy import Select, and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import utcnow
from app.errors import ConflictError, NotFoundError, storage_errors
from app.models.property import CLOSED_STATUSES, Property
from app.schemas.property import PropertyCreate, PropertyFilters, PropertyUpdate

logger = logging.getLogger(__name__)


def _newest_first(query: Select) -> Select:
    return query.order_by(Property.created_at.desc(), Property.id.desc())


def build_search_query(filters: PropertyFilters) -> Select:
    """Translate search filters into a ``SELECT`` over properties.

    Supplied fields are AND-ed together; absent fields add no predicate.
    ``city`` is a case-insensitive substring match with LIKE wildcards in the
    input escaped. Price and surface bounds are inclusive.
    """
    conditions = []
    if filters.type is not None:
        conditions.append(Property.type == filters.type)
    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type)
    if filters.city:
        conditions.append(Property.city.icontains(filters.city, autoescape=True))
    if filters.min_price is not None:
        conditions.append(Property.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Property.price <= filters.max_price)
    if filters.min_surface is not None:
        conditions.append(Property.surface >= filters.min_surface)
    if filters.max_surface is not None:
        conditions.append(Property.surface <= filters.max_surface)
    if filters.rooms is not None:
        conditions.append(Property.rooms == filters.rooms)

    query = select(Property)
    if conditions:
        query = query.where(and_(*conditions))
    query = _newest_first(query)

    if filters.offset:
        query = query.offset(filters.offset)
    if filters.limit is not None:
        query = query.limit(filters.limit)
    return query


async def search_properties(db: AsyncSession, filters: PropertyFilters) -> list[Property]:
    """Return the properties matching every supplied filter, newest first."""
    with storage_errors("search properties"):
        result = await db.execute(build_search_query(filters))
    return list(result.scalars().all())


async def get_featured_properties(db: AsyncSession, limit: int | None = None) -> list[Property]:
    """Return up to ``limit`` available properties flagged as featured, newest first."""
    query = _newest_first(
        select(Property).where(Property.status == "available", Property.featured.is_(True))
    ).limit(limit or settings.featured_default_limit)

    with storage_errors("load featured properties"):
        result = await db.execute(query)
    return list(result.scalars().all())


async def get_property(db: AsyncSession, property_id: int) -> Property | None:
    """Return the property with ``property_id``, or ``None`` when there is none."""
    with storage_errors("load property"):
        result = await db.execute(select(Property).where(Property.id == property_id))
    return result.scalar_one_or_none()


async def create_property(db: AsyncSession, data: PropertyCreate, images: list[str]) -> Property:
    """Persist a new listing with the given stored image references."""
    values = data.model_dump()
    prop = Property(**values, images=list(images))
    if prop.status in CLOSED_STATUSES:
        prop.closed_at = utcnow()

    with storage_errors("create property"):
        db.add(prop)
        await db.flush()
        await db.refresh(prop)

    logger.info("Created property %s (%s, %s)", prop.id, prop.type, prop.city)
    return prop


async def update_property(
    db: AsyncSession,
    property_id: int,
    data: PropertyUpdate,
    new_images: list[str] | None = None,
) -> Property:
    """Apply a partial update; only explicitly supplied fields change.

    When images are touched the stored list becomes ``data.existing_images``
    (or the current list when omitted) followed by ``new_images``. The write
    is conditional on ``updated_at`` still holding the value that was read,
    so a racing writer's change is never silently overwritten.

    Raises:
        NotFoundError: If the property does not exist.
        ConflictError: If the property changed between read and write.
    """
    prop = await get_property(db, property_id)
    if prop is None:
        raise NotFoundError("Property not found")

    changes = data.model_dump(exclude_unset=True, exclude={"existing_images"})
    existing_images = data.existing_images
    if new_images or existing_images is not None:
        kept = existing_images if existing_images is not None else list(prop.images or [])
        changes["images"] = [*kept, *(new_images or [])]

    now = utcnow()
    new_status = changes.get("status")
    if new_status is not None and new_status != prop.status:
        changes["closed_at"] = now if new_status in CLOSED_STATUSES else None
    changes["updated_at"] = now

    stmt = (
        update(Property)
        .where(Property.id == property_id, Property.updated_at == prop.updated_at)
        .values(**changes)
        .execution_options(synchronize_session=False)
    )
    with storage_errors("update property"):
        result = await db.execute(stmt)
    if result.rowcount == 0:
        raise ConflictError("Property was modified concurrently; reload it and retry")

    with storage_errors("reload property"):
        refreshed = await db.execute(
            select(Property).where(Property.id == property_id).execution_options(populate_existing=True)
        )
    logger.info("Updated property %s fields=%s", property_id, sorted(changes))
    return refreshed.scalar_one()


async def delete_property(db: AsyncSession, property_id: int) -> None:
    """Delete a listing. Favorites and contact requests that reference it are kept.

    Raises:
        NotFoundError: If the property does not exist.
    """
    prop = await get_property(db, property_id)
    if prop is None:
        raise NotFoundError("Property not found")

    with storage_errors("delete property"):
        await db.delete(prop)
        await db.flush()

    logger.info("Deleted property %s", property_id)
