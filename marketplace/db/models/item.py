"""
Item model - a for-sale listing, plus the item/user favorites association.
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.db.base import Base

if TYPE_CHECKING:
    from marketplace.db.models.user import User


class ItemCategory(str, enum.Enum):
    CLOTHING = "Clothing"
    SHOES = "Shoes"
    ACCESSORIES = "Accessories"
    ELECTRONICS = "Electronics"
    HOME = "Home"
    KIDS = "Kids"
    BEAUTY = "Beauty"
    SPORTS = "Sports"
    OTHER = "Other"


class ItemCondition(str, enum.Enum):
    NEW_WITH_TAGS = "New with tags"
    NEW_WITHOUT_TAGS = "New without tags"
    VERY_GOOD = "Very good"
    GOOD = "Good"
    SATISFACTORY = "Satisfactory"


class ItemStatus(str, enum.Enum):
    ACTIVE = "active"
    SOLD = "sold"
    RESERVED = "reserved"
    HIDDEN = "hidden"


def _enum_column(enum_cls: type[enum.Enum], name: str) -> Enum:
    # Store the human-readable values as VARCHAR + CHECK so SQLite and PostgreSQL agree
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        validate_strings=True,
        create_constraint=True,
        values_callable=lambda members: [m.value for m in members],
    )


item_favorites = Table(
    "item_favorites",
    Base.metadata,
    Column("item_id", ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Item(Base):
    """Listing owned by a seller. Only the seller may edit or delete it."""

    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        Index("ix_items_category_status", "category", "status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    category: Mapped[ItemCategory] = mapped_column(_enum_column(ItemCategory, "item_category"), nullable=False)
    condition: Mapped[ItemCondition] = mapped_column(_enum_column(ItemCondition, "item_condition"), nullable=False)
    size: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    brand: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    seller_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[ItemStatus] = mapped_column(
        _enum_column(ItemStatus, "item_status"), nullable=False, default=ItemStatus.ACTIVE
    )
    views: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Seller is always needed for responses: load it in the same query.
    seller: Mapped["User"] = relationship("User", lazy="joined", innerjoin=True)
    favorited_by: Mapped[list["User"]] = relationship(
        "User", secondary=item_favorites, lazy="selectin"
    )

    @property
    def favorite_ids(self) -> list[int]:
        return [user.id for user in self.favorited_by]

    def is_owned_by(self, user_id: int) -> bool:
        return self.seller_id == user_id

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, title={self.title})>"
