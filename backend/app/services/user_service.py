"""User service — lookups and the session-driven profile upsert."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import dialect_insert, utcnow
from app.errors import storage_errors
from app.models.user import User

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    """Return the user with ``user_id`` or ``None``."""
    with storage_errors("load user"):
        result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def upsert_user(
    db: AsyncSession,
    user_id: str,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
) -> User:
    """Insert the user or overwrite its profile fields if it already exists.

    A single ``INSERT ... ON CONFLICT (id) DO UPDATE`` so concurrent session
    reports for the same id cannot race. ``is_admin`` is never touched.
    """
    now = utcnow()
    profile = {
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": profile_image_url,
    }
    insert = dialect_insert(db)
    stmt = (
        insert(User)
        .values(id=user_id, created_at=now, updated_at=now, **profile)
        .on_conflict_do_update(
            index_elements=[User.id],
            set_={**profile, "updated_at": now},
        )
    )

    with storage_errors("save user"):
        await db.execute(stmt)
        result = await db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
    user = result.scalar_one()
    logger.info("Upserted user %s", user_id)
    return user
