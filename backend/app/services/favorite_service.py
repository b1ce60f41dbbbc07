"""Favorite service — a user's saved listings.

The (user, property) pair is unique at the database level; adding an
existing favorite is a no-op that returns the stored row.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.database import dialect_insert, utcnow
from app.errors import NotFoundError, storage_errors
from app.models.favorite import Favorite
from app.services.property_service import get_property

logger = logging.getLogger(__name__)


def _pair(user_id: str, property_id: int):
    return Favorite.user_id == user_id, Favorite.property_id == property_id


async def add_favorite(db: AsyncSession, user_id: str, property_id: int) -> tuple[Favorite, bool]:
    """Save ``property_id`` for ``user_id``.

    Returns:
        The favorite row and whether it was created by this call.

    Raises:
        NotFoundError: If the property does not exist.
    """
    if await get_property(db, property_id) is None:
        raise NotFoundError("Property not found")

    insert = dialect_insert(db)
    stmt = (
        insert(Favorite)
        .values(user_id=user_id, property_id=property_id, created_at=utcnow())
        .on_conflict_do_nothing(index_elements=["user_id", "property_id"])
    )
    with storage_errors("add favorite"):
        result = await db.execute(stmt)
        favorite = (await db.execute(select(Favorite).where(*_pair(user_id, property_id)))).scalar_one()

    created = result.rowcount == 1
    if created:
        logger.info("User %s favorited property %s", user_id, property_id)
    return favorite, created


async def remove_favorite(db: AsyncSession, user_id: str, property_id: int) -> None:
    """Delete the favorite for the pair; removing a missing favorite is a no-op."""
    with storage_errors("remove favorite"):
        result = await db.execute(
            delete(Favorite).where(*_pair(user_id, property_id)).execution_options(synchronize_session=False)
        )
    if result.rowcount:
        logger.info("User %s unfavorited property %s", user_id, property_id)


async def is_favorite(db: AsyncSession, user_id: str, property_id: int) -> bool:
    with storage_errors("check favorite"):
        result = await db.execute(select(Favorite.id).where(*_pair(user_id, property_id)))
    return result.first() is not None


async def list_favorites(db: AsyncSession, user_id: str) -> list[Favorite]:
    """Return the user's favorites with their property loaded, newest favorite first.

    Favorites whose property was deleted are not returned.
    """
    query = (
        select(Favorite)
        .join(Favorite.property)
        .options(contains_eager(Favorite.property))
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    with storage_errors("list favorites"):
        result = await db.execute(query)
    return list(result.scalars().all())


