"""Tests for the admin dashboard counters and their month boundaries."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.contact_request import ContactRequest
from app.models.property import Property
from app.services.stats_service import get_stats, month_start, next_month_start

pytestmark = pytest.mark.asyncio


def _property(**overrides) -> Property:
    values = {
        "title": "Villa",
        "description": "A villa.",
        "type": "sale",
        "property_type": "house",
        "price": Decimal("1000.00"),
        "surface": 100,
        "rooms": 3,
        "address": "Rue X",
        "city": "Nouakchott",
        "postal_code": "000",
    }
    values.update(overrides)
    return Property(**values)


class TestMonthStart:
    async def test_truncates_to_first_instant(self) -> None:
        assert month_start(datetime(2026, 10, 31, 23, 59, 59, 999999)) == datetime(2026, 10, 1)

    async def test_first_instant_is_its_own_start(self) -> None:
        assert month_start(datetime(2026, 11, 1)) == datetime(2026, 11, 1)

    async def test_next_month_start(self) -> None:
        assert next_month_start(datetime(2026, 10, 19, 8, 30)) == datetime(2026, 11, 1)

    async def test_next_month_start_rolls_over_year(self) -> None:
        assert next_month_start(datetime(2026, 12, 31, 23, 59)) == datetime(2027, 1, 1)


class TestGetStats:
    async def test_visit_on_last_second_of_month(self, db_session: AsyncSession) -> None:
        db_session.add(
            ContactRequest(
                property_id=1,
                name="Late",
                email="late@example.com",
                message="Hello",
                type="info",
                created_at=datetime(2026, 10, 31, 23, 59, 59),
            )
        )
        await db_session.flush()

        october = await get_stats(db_session, now=datetime(2026, 10, 31, 23, 59, 59))
        assert october.monthly_visits == 1

        november = await get_stats(db_session, now=datetime(2026, 11, 1, 0, 0, 0))
        assert november.monthly_visits == 0

    async def test_revenue_counts_listings_closed_this_month(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [
                _property(price=Decimal("5000000.00"), status="sold", closed_at=datetime(2026, 10, 3, 12)),
                _property(price=Decimal("45000.00"), status="rented", closed_at=datetime(2026, 10, 20)),
                # Closed last month
                _property(price=Decimal("999.00"), status="sold", closed_at=datetime(2026, 9, 30, 23, 59)),
                # Still on the market
                _property(price=Decimal("777.00"), status="available"),
                _property(price=Decimal("888.00"), status="pending"),
            ]
        )
        await db_session.flush()

        stats = await get_stats(db_session, now=datetime(2026, 10, 25))
        assert stats.total_properties == 5
        assert stats.monthly_revenue == Decimal("5045000.00")

    async def test_empty_database(self, db_session: AsyncSession) -> None:
        stats = await get_stats(db_session, now=datetime(2026, 10, 19))
        assert stats.total_properties == 0
        assert stats.active_users == 0
        assert stats.monthly_visits == 0
        assert stats.monthly_revenue == Decimal("0.00")

    async def test_counts_every_user(self, db_session: AsyncSession, test_user, admin_user) -> None:
        stats = await get_stats(db_session, now=datetime(2026, 10, 19))
        assert stats.active_users == 2

    async def test_past_month_excludes_later_rows(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [
                ContactRequest(
                    property_id=1,
                    name="September",
                    email="sept@example.com",
                    message="Hello",
                    type="info",
                    created_at=datetime(2026, 9, 15),
                ),
                ContactRequest(
                    property_id=1,
                    name="October",
                    email="oct@example.com",
                    message="Hello",
                    type="visit",
                    created_at=datetime(2026, 10, 1),
                ),
                _property(price=Decimal("100.00"), status="sold", closed_at=datetime(2026, 9, 30, 23, 59, 59)),
                _property(price=Decimal("900.00"), status="sold", closed_at=datetime(2026, 10, 1)),
            ]
        )
        await db_session.flush()

        september = await get_stats(db_session, now=datetime(2026, 9, 20))
        assert september.monthly_visits == 1
        assert september.monthly_revenue == Decimal("100.00")
