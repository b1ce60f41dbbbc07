"""SQLAlchemy models.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from app.models.contact_request import ContactRequest
from app.models.favorite import Favorite
from app.models.property import Property
from app.models.user import User

__all__ = [
    "ContactRequest",
    "Favorite",
    "Property",
    "User",
]
