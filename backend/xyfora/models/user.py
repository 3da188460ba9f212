"""
XYFORA Backend — User SQLAlchemy Model
=======================================

What:  ORM model representing the `users` table.
Who:   Used by the record store; read by Alembic for schema management.

Table Design:
    - id: 24-hex opaque identifier generated in Python (see models/ids.py)
    - email: unique; the login key
    - password: Argon2 hash produced by pwdlib, never serialized
    - created_at / updated_at: UTC, timezone-aware
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from xyfora.database import Base
from xyfora.models.ids import generate_object_id

if TYPE_CHECKING:
    from xyfora.models.product import Product


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created on registration; never deleted or modified by this service.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_object_id,
        comment="24-hex opaque identifier",
    )

    fullname: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique login email",
    )

    # Hashed only. Response schemas have no field for it.
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Argon2 password hash",
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

    products: Mapped[List["Product"]] = relationship(back_populates="author")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
