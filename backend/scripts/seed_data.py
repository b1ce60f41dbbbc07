"""Seed the database with an admin account and sample listings.

Listings cover the main Mauritanian markets (Nouakchott, Nouadhibou, Rosso)
across every listing and property type, so every search filter has data to
match against.

Run from backend/:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from app.auth.jwt import create_access_token
from app.database import async_session_factory, engine, utcnow
from app.models.contact_request import ContactRequest
from app.models.favorite import Favorite
from app.models.property import Property
from app.models.user import User

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ADMIN_USER = {
    "id": "seed-admin",
    "email": "admin@immo.local",
    "first_name": "Admin",
    "last_name": "Immo",
}

PROPERTIES = [
    {
        "title": "Villa Tevragh Zeina",
        "description": "Spacious family villa with a walled garden, five minutes from the embassies.",
        "type": "sale",
        "property_type": "house",
        "price": Decimal("5000000.00"),
        "surface": 200,
        "rooms": 5,
        "bedrooms": 3,
        "address": "Rue 42-150, Tevragh Zeina",
        "city": "Nouakchott",
        "postal_code": "000",
        "latitude": Decimal("18.10330000"),
        "longitude": Decimal("-15.97850000"),
        "features": ["garden", "parking", "air_conditioning"],
        "featured": True,
    },
    {
        "title": "Appartement Ksar",
        "description": "Bright two-room apartment near the Ksar market.",
        "type": "rental",
        "property_type": "apartment",
        "price": Decimal("45000.00"),
        "surface": 80,
        "rooms": 2,
        "bedrooms": 1,
        "address": "Avenue Gamal Abdel Nasser",
        "city": "Nouakchott",
        "postal_code": "000",
        "features": ["balcony"],
        "featured": True,
    },
    {
        "title": "Local commercial port de pêche",
        "description": "Ground-floor commercial space facing the fishing port.",
        "type": "rental",
        "property_type": "commercial",
        "price": Decimal("120000.00"),
        "surface": 150,
        "rooms": 3,
        "address": "Boulevard Maritime",
        "city": "Nouadhibou",
        "postal_code": "100",
        "features": ["storefront", "storage"],
    },
    {
        "title": "Terrain agricole bord du fleuve",
        "description": "Irrigable plot along the Senegal river.",
        "type": "sale",
        "property_type": "land",
        "price": Decimal("1500000.00"),
        "surface": 5000,
        "rooms": 1,
        "address": "Route de Keur Macène",
        "city": "Rosso",
        "postal_code": "200",
        "features": ["water_access"],
    },
    {
        "title": "Maison Cansado",
        "description": "Renovated house with sea view, recently sold.",
        "type": "sale",
        "property_type": "house",
        "price": Decimal("3200000.00"),
        "surface": 160,
        "rooms": 4,
        "bedrooms": 3,
        "address": "Cité Cansado",
        "city": "Nouadhibou",
        "postal_code": "100",
        "features": ["sea_view", "terrace"],
        "status": "sold",
    },
]

CONTACT_REQUESTS = [
    {
        "name": "Mariem Sidi",
        "email": "mariem@example.com",
        "phone": "+22244000000",
        "message": "Is a visit possible this weekend?",
        "type": "visit",
    },
    {
        "name": "Ahmed Ould Cheikh",
        "email": "ahmed@example.com",
        "message": "Is the price negotiable?",
        "type": "offer",
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with sample listings.

    Idempotent: removes the admin user and every listing before re-seeding.
    """
    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.id == ADMIN_USER["id"]))
        if result.scalar_one_or_none() is not None:
            print(f"⚠️  Admin user '{ADMIN_USER['email']}' already exists. Deleting and re-seeding...")

        # Favorites and requests hold plain references, so clear them explicitly
        await session.execute(delete(ContactRequest))
        await session.execute(delete(Favorite))
        await session.execute(delete(Property))
        await session.execute(delete(User).where(User.id == ADMIN_USER["id"]))
        await session.flush()

        # ------------------------------------------------------------------
        # 1. Create admin user
        # ------------------------------------------------------------------
        admin = User(**ADMIN_USER, is_admin=True)
        session.add(admin)
        await session.flush()
        print(f"✅ Created admin user: {admin.email} (id={admin.id})")

        # ------------------------------------------------------------------
        # 2. Create properties, oldest first so the first entry lists first
        # ------------------------------------------------------------------
        now = utcnow()
        created_properties: list[Property] = []
        for index, prop_data in enumerate(reversed(PROPERTIES)):
            created_at = now - timedelta(minutes=len(PROPERTIES) - index)
            prop = Property(**prop_data, images=[], created_at=created_at, updated_at=created_at)
            if prop.status == "sold":
                prop.closed_at = now
            session.add(prop)
            await session.flush()
            created_properties.append(prop)
            print(f"   🏠 {prop.title} — {prop.city} ({prop.price} MRU, {prop.type})")

        # ------------------------------------------------------------------
        # 3. Create contact requests on the newest listing
        # ------------------------------------------------------------------
        target = created_properties[-1]
        for request_data in CONTACT_REQUESTS:
            session.add(ContactRequest(property_id=target.id, **request_data))
        await session.flush()

        session.add(Favorite(user_id=admin.id, property_id=target.id))
        await session.flush()
        await session.commit()

        token = create_access_token({"sub": admin.id, "email": admin.email})

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Admin:            {admin.email} (id={admin.id})")
        print(f"   Properties:       {len(created_properties)}")
        print(f"   Contact requests: {len(CONTACT_REQUESTS)}")
        print(f"   Favorites:        1")
        print("=" * 60)
        print("🔑 Admin bearer token (local development only):")
        print(f"   {token}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
