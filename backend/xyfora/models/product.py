"""
XYFORA Backend — Product SQLAlchemy Model
==========================================

What:  ORM model representing the `products` table.
Who:   Used by the record store; read by Alembic for schema management.

Ownership:
    author_id is set once at creation from the authenticated identity and is
    never written again. The update path only touches title and price.

Index on (author_id, created_at DESC):
    Serves the only list query, "my products, newest first".
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xyfora.database import Base
from xyfora.models.ids import generate_object_id
from xyfora.models.user import utcnow

if TYPE_CHECKING:
    from xyfora.models.user import User


class Product(Base):
    """A product listing owned by exactly one user."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
        comment="24-hex opaque identifier",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Non-negative price",
    )

    author_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user; immutable after creation",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped["User"] = relationship(back_populates="products")

    __table_args__ = (
        Index("idx_products_author_created_at", author_id, created_at.desc()),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, author_id={self.author_id}, "
            f"title='{self.title}')>"
        )
