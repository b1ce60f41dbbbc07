"""Contact request model — inquiries from prospective buyers and tenants."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, CreatedAtMixin
from app.models.property import Property

CONTACT_REQUEST_TYPES = ("visit", "info", "offer")
CONTACT_REQUEST_STATUSES = ("pending", "contacted", "closed")


class ContactRequest(CreatedAtMixin, Base):
    """An inquiry about one property, optionally tied to a signed-in user."""

    __tablename__ = "contact_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # visit, info, offer
    status: Mapped[str] = mapped_column(
        String(20),
        default="pending",
        server_default="pending",
        nullable=False,
        index=True,
    )

    property: Mapped[Property] = relationship(
        Property,
        primaryjoin="foreign(ContactRequest.property_id) == Property.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return (
            f"<ContactRequest(id={self.id}, property_id={self.property_id}, "
            f"type={self.type!r}, status={self.status!r})>"
        )
