"""Contact request API routes — public submission, admin follow-up."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AccessLevel, get_db, require_access
from app.models.contact_request import ContactRequest
from app.models.user import User
from app.schemas.contact_request import (
    ContactRequestCreate,
    ContactRequestResponse,
    ContactRequestStatusUpdate,
    ContactRequestWithPropertyResponse,
)
from app.services import contact_request_service

router = APIRouter(prefix="/api/contact-requests", tags=["contact-requests"])


@router.get(
    "",
    response_model=list[ContactRequestWithPropertyResponse],
    summary="List contact requests",
)
async def list_contact_requests(
    property_id: int | None = Query(None, alias="propertyId", ge=1),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
) -> list[ContactRequest]:
    """Return every contact request with its property, optionally for one property only."""
    return await contact_request_service.list_contact_requests(db, property_id)


@router.post(
    "",
    response_model=ContactRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a contact request",
)
async def create_contact_request(
    body: ContactRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(require_access(AccessLevel.PUBLIC)),
) -> ContactRequest:
    """Record an inquiry. Anonymous callers are allowed; signed-in callers are linked."""
    user_id = current_user.id if current_user is not None else None
    return await contact_request_service.create_contact_request(db, body, user_id=user_id)


@router.put(
    "/{request_id}/status",
    response_model=ContactRequestResponse,
    summary="Update a contact request's status",
)
async def update_contact_request_status(
    request_id: int,
    body: ContactRequestStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_access(AccessLevel.ADMIN)),
) -> ContactRequest:
    return await contact_request_service.update_contact_request_status(db, request_id, body.status)
