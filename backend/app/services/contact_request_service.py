"""Contact request service — public inquiries and their admin follow-up.

Status transitions are unrestricted: any of pending, contacted and closed
may follow any other.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.errors import NotFoundError, storage_errors
from app.models.contact_request import ContactRequest
from app.schemas.contact_request import ContactRequestCreate
from app.services.property_service import get_property

logger = logging.getLogger(__name__)


async def create_contact_request(
    db: AsyncSession,
    data: ContactRequestCreate,
    user_id: str | None = None,
) -> ContactRequest:
    """Record an inquiry with ``status = pending``.

    Raises:
        NotFoundError: If the property does not exist.
    """
    if await get_property(db, data.property_id) is None:
        raise NotFoundError("Property not found")

    request = ContactRequest(**data.model_dump(), user_id=user_id, status="pending")
    with storage_errors("create contact request"):
        db.add(request)
        await db.flush()
        await db.refresh(request)

    logger.info(
        "Contact request %s (%s) received for property %s",
        request.id,
        request.type,
        request.property_id,
    )
    return request


async def list_contact_requests(db: AsyncSession, property_id: int | None = None) -> list[ContactRequest]:
    """Return contact requests joined with their property, newest first."""
    query = (
        select(ContactRequest)
        .join(ContactRequest.property)
        .options(contains_eager(ContactRequest.property))
    )
    if property_id is not None:
        query = query.where(ContactRequest.property_id == property_id)
    query = query.order_by(ContactRequest.created_at.desc(), ContactRequest.id.desc())

    with storage_errors("list contact requests"):
        result = await db.execute(query)
    return list(result.scalars().all())


async def update_contact_request_status(db: AsyncSession, request_id: int, status: str) -> ContactRequest:
    """Set the status of a contact request.

    Raises:
        NotFoundError: If no contact request has ``request_id``; nothing is written.
    """
    with storage_errors("load contact request"):
        result = await db.execute(select(ContactRequest).where(ContactRequest.id == request_id))
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFoundError("Contact request not found")

    previous = request.status
    request.status = status
    with storage_errors("update contact request"):
        await db.flush()
        await db.refresh(request)

    logger.info("Contact request %s status %s -> %s", request_id, previous, status)
    return request
