"""Admin dashboard counters."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.errors import storage_errors
from app.models.contact_request import ContactRequest
from app.models.property import CLOSED_STATUSES, Property
from app.models.user import User
from app.schemas.stats import StatsResponse


def month_start(now: datetime) -> datetime:
    """First instant of the calendar month containing ``now`` (naive UTC)."""
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def next_month_start(now: datetime) -> datetime:
    """First instant of the calendar month after the one containing ``now``."""
    start = month_start(now)
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


async def get_stats(db: AsyncSession, now: datetime | None = None) -> StatsResponse:
    """Compute the dashboard counters.

    Month boundaries are UTC, matching how every timestamp is stored.
    Revenue is the summed price of listings that were sold or rented this
    month, dated by ``Property.closed_at``. Both monthly counters cover
    ``[month_start(now), next_month_start(now))`` only, so a past ``now``
    never picks up later rows.
    """
    now = now or utcnow()
    since, until = month_start(now), next_month_start(now)

    with storage_errors("compute stats"):
        total_properties = (await db.execute(select(func.count()).select_from(Property))).scalar_one()
        active_users = (await db.execute(select(func.count()).select_from(User))).scalar_one()
        monthly_visits = (
            await db.execute(
                select(func.count())
                .select_from(ContactRequest)
                .where(ContactRequest.created_at >= since, ContactRequest.created_at < until)
            )
        ).scalar_one()
        revenue = (
            await db.execute(
                select(func.coalesce(func.sum(Property.price), 0)).where(
                    Property.status.in_(CLOSED_STATUSES),
                    Property.closed_at >= since,
                    Property.closed_at < until,
                )
            )
        ).scalar_one()

    return StatsResponse(
        total_properties=total_properties,
        active_users=active_users,
        monthly_visits=monthly_visits,
        monthly_revenue=Decimal(str(revenue)).quantize(Decimal("0.01")),
    )
