"""Favorite model — a user's saved listings."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, CreatedAtMixin
from app.models.property import Property


class Favorite(CreatedAtMixin, Base):
    """Association between a user and a property they saved."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Plain references: deleting a property leaves its favorites in place
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    property_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Only populated through an explicit join (contains_eager)
    property: Mapped[Property] = relationship(
        Property,
        primaryjoin="foreign(Favorite.property_id) == Property.id",
        viewonly=True,
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_favorites_user_property"),
    )

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, user_id={self.user_id!r}, property_id={self.property_id})>"
