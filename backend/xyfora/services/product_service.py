"""
XYFORA Backend — Product Service
=================================

What:  Business rules for /products: list, create, read, update, delete.
How:   Identity and id shape are already established by the route
       dependencies (steps 1–2 of the access guard sequence); this service
       runs the remaining steps:

           lookup ──missing──▶ NotFoundError (404)
             │
           authorize_mutation ──not owner──▶ AuthorizationError (403)
             │
           mutate ──▶ ProductResponse (200) / None (204)

    Reads by id stop after the lookup: any authenticated user may view a
    product, only its owner may change it.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from xyfora.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from xyfora.models import Product
from xyfora.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from xyfora.services.access_guard import AccessGuard, access_guard
from xyfora.services.record_store import RecordStore, record_store

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(
        self,
        store: Optional[RecordStore] = None,
        guard: Optional[AccessGuard] = None,
    ) -> None:
        self.store = store or record_store
        self.guard = guard or access_guard

    async def list_for_owner(self, db: AsyncSession, user_id: str) -> List[ProductResponse]:
        products = await self.store.find_products_by_owner(db, user_id)
        return [ProductResponse.model_validate(p) for p in products]

    async def create(self, db: AsyncSession, user_id: str, data: ProductCreate) -> ProductResponse:
        # A valid token whose user row is gone cannot own anything
        author = await self.store.find_user_by_id(db, user_id)
        if author is None:
            raise AuthenticationError(message="Unauthorized", context={"user_id": user_id})

        product = await self.store.create_product(db, author=author, title=data.title, price=data.price)
        logger.info("Product %s created by %s", product.id, user_id)
        return ProductResponse.model_validate(product)

    async def get(self, db: AsyncSession, product_id: str) -> ProductResponse:
        product = await self._find_or_404(db, product_id)
        return ProductResponse.model_validate(product)

    async def update(
        self, db: AsyncSession, user_id: str, product_id: str, data: ProductUpdate
    ) -> ProductResponse:
        product = await self._find_owned(db, user_id, product_id)
        updated = await self.store.update_product(db, product, **data.changes())
        logger.info("Product %s updated by %s", product_id, user_id)
        return ProductResponse.model_validate(updated)

    async def delete(self, db: AsyncSession, user_id: str, product_id: str) -> None:
        await self._find_owned(db, user_id, product_id)
        await self.store.delete_product(db, product_id)
        logger.info("Product %s deleted by %s", product_id, user_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _find_or_404(self, db: AsyncSession, product_id: str) -> Product:
        product = await self.store.find_product_by_id(db, product_id)
        if product is None:
            raise NotFoundError(resource="Product", resource_id=product_id)
        return product

    async def _find_owned(self, db: AsyncSession, user_id: str, product_id: str) -> Product:
        # Existence first: 404 must win over 403
        product = await self._find_or_404(db, product_id)
        if not self.guard.authorize_mutation(user_id, product.author_id):
            logger.warning("User %s denied mutation of product %s", user_id, product_id)
            raise AuthorizationError(context={"product_id": product_id, "user_id": user_id})
        return product


product_service = ProductService()
