"""
XYFORA Backend — Record Store
==============================

What:  The narrow persistence interface used by the services.
How:   Thin async SQLAlchemy queries over the request's session. Writes are
       flushed, not committed; the session dependency commits once the
       handler returns.

Error translation:
    - Lookups return None for missing rows (services decide on 404 vs 401)
    - Unique email violation on insert        → ConflictError (400)
    - Any other SQLAlchemyError                → DatabaseError (500, generic)
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from xyfora.exceptions import ConflictError, DatabaseError
from xyfora.models import Product, User

logger = logging.getLogger(__name__)


class RecordStore:
    """Stateless; every method receives the request's session."""

    # ── Users ─────────────────────────────────────────────────────────────

    async def find_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find_user_by_email", e)

    async def find_user_by_id(self, db: AsyncSession, user_id: str) -> Optional[User]:
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._database_error("find_user_by_id", e)

    async def create_user(
        self, db: AsyncSession, fullname: str, email: str, password_hash: str
    ) -> User:
        user = User(fullname=fullname, email=email, password=password_hash)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.info("Duplicate registration rejected by unique constraint")
            raise ConflictError(message="User already exists", context={"field": "email"})
        except SQLAlchemyError as e:
            raise self._database_error("create_user", e)
        return user

    # ── Products ──────────────────────────────────────────────────────────

    async def find_product_by_id(self, db: AsyncSession, product_id: str) -> Optional[Product]:
        try:
            result = await db.execute(
                select(Product)
                .options(selectinload(Product.author))
                .where(Product.id == product_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find_product_by_id", e)

    async def find_products_by_owner(self, db: AsyncSession, owner_id: str) -> List[Product]:
        """Newest first; id breaks ties between rows created in the same instant."""
        try:
            result = await db.execute(
                select(Product)
                .options(selectinload(Product.author))
                .where(Product.author_id == owner_id)
                .order_by(desc(Product.created_at), desc(Product.id))
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("find_products_by_owner", e)

    async def create_product(
        self, db: AsyncSession, author: User, title: str, price: float
    ) -> Product:
        product = Product(title=title, price=price, author_id=author.id, author=author)
        db.add(product)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("create_product", e)
        return product

    async def update_product(self, db: AsyncSession, product: Product, **fields) -> Product:
        """
        Apply a partial update. Only title and price are writable; the
        author reference is never touched here.
        """
        for name in ("title", "price"):
            if name in fields and fields[name] is not None:
                setattr(product, name, fields[name])
        product.updated_at = datetime.now(timezone.utc)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("update_product", e)
        return product

    async def delete_product(self, db: AsyncSession, product_id: str) -> None:
        try:
            await db.execute(delete(Product).where(Product.id == product_id))
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("delete_product", e)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _database_error(operation: str, error: Exception) -> DatabaseError:
        logger.error("Database error in %s: %s", operation, str(error), exc_info=True)
        return DatabaseError(
            context={"operation": operation, "error_type": type(error).__name__},
        )


record_store = RecordStore()
