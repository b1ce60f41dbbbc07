"""Pydantic v2 schemas for the admin dashboard counters."""

from decimal import Decimal

from app.schemas.common import CamelModel


class StatsResponse(CamelModel):
    """Summary counters for the admin dashboard.

    ``active_users`` counts every registered user; no recency filter applies.
    ``monthly_visits`` and ``monthly_revenue`` cover the current UTC calendar month.
    """

    total_properties: int
    active_users: int
    monthly_visits: int
    monthly_revenue: Decimal
