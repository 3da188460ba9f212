"""
XYFORA Backend — Product Service Unit Tests
============================================

What:  Tests for ProductService business rules.
How:   The service gets an AsyncMock record store; no database is touched.

What we test:
    ✅ Create binds the product to the caller
    ✅ Missing product is 404 for read, update and delete
    ✅ Non-owner mutation is 403, and only after the product is found
    ✅ Update passes only supplied fields; delete runs only for the owner
    ✅ Store failures propagate as DatabaseError
"""

import pytest

from xyfora.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DatabaseError,
    NotFoundError,
)
from xyfora.schemas.product import ProductCreate, ProductUpdate
from xyfora.services.product_service import ProductService

MISSING_ID = "64f3b2c4e1234567890abcde"


class TestProductRead:

    @pytest.mark.asyncio
    async def test_list_for_owner(self, mock_db_session, mock_store, make_user, make_product):
        owner = make_user()
        mock_store.find_products_by_owner.return_value = [
            make_product(author=owner, title="newer"),
            make_product(author=owner, title="older"),
        ]
        service = ProductService(store=mock_store)

        result = await service.list_for_owner(mock_db_session, owner.id)

        assert [p.title for p in result] == ["newer", "older"]
        assert all(p.author_id == owner.id for p in result)
        mock_store.find_products_by_owner.assert_awaited_once_with(mock_db_session, owner.id)

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session, mock_store):
        mock_store.find_products_by_owner.return_value = []
        service = ProductService(store=mock_store)

        assert await service.list_for_owner(mock_db_session, MISSING_ID) == []

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session, mock_store, make_product):
        product = make_product()
        mock_store.find_product_by_id.return_value = product
        service = ProductService(store=mock_store)

        result = await service.get(mock_db_session, product.id)

        assert result.id == product.id
        assert result.author.email == product.author.email

    @pytest.mark.asyncio
    async def test_get_missing(self, mock_db_session, mock_store):
        mock_store.find_product_by_id.return_value = None
        service = ProductService(store=mock_store)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get(mock_db_session, MISSING_ID)
        assert exc_info.value.message == "Product not found"


class TestProductCreate:

    @pytest.mark.asyncio
    async def test_create_binds_author(self, mock_db_session, mock_store, make_user, make_product):
        author = make_user()
        mock_store.find_user_by_id.return_value = author
        mock_store.create_product.return_value = make_product(author=author, title="Lamp", price=10.0)
        service = ProductService(store=mock_store)

        result = await service.create(mock_db_session, author.id, ProductCreate(title="Lamp", price=10))

        assert result.author_id == author.id
        mock_store.create_product.assert_awaited_once_with(
            mock_db_session, author=author, title="Lamp", price=10.0
        )

    @pytest.mark.asyncio
    async def test_create_for_vanished_user(self, mock_db_session, mock_store):
        mock_store.find_user_by_id.return_value = None
        service = ProductService(store=mock_store)

        with pytest.raises(AuthenticationError):
            await service.create(mock_db_session, MISSING_ID, ProductCreate(title="Lamp", price=1))
        mock_store.create_product.assert_not_awaited()


class TestProductMutation:

    @pytest.mark.asyncio
    async def test_update_by_owner(self, mock_db_session, mock_store, make_product):
        product = make_product(title="Old")
        mock_store.find_product_by_id.return_value = product
        mock_store.update_product.return_value = make_product(
            author=product.author, id=product.id, title="New", price=product.price
        )
        service = ProductService(store=mock_store)

        result = await service.update(
            mock_db_session, product.author_id, product.id, ProductUpdate(title="New")
        )

        assert result.title == "New"
        assert result.author_id == product.author_id
        mock_store.update_product.assert_awaited_once_with(mock_db_session, product, title="New")

    @pytest.mark.asyncio
    async def test_update_by_non_owner(self, mock_db_session, mock_store, make_user, make_product):
        product = make_product()
        intruder = make_user()
        mock_store.find_product_by_id.return_value = product
        service = ProductService(store=mock_store)

        with pytest.raises(AuthorizationError) as exc_info:
            await service.update(mock_db_session, intruder.id, product.id, ProductUpdate(price=1))

        assert exc_info.value.status_code == 403
        mock_store.update_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_product_wins_over_ownership(self, mock_db_session, mock_store, make_user):
        mock_store.find_product_by_id.return_value = None
        service = ProductService(store=mock_store)

        with pytest.raises(NotFoundError):
            await service.update(mock_db_session, make_user().id, MISSING_ID, ProductUpdate(price=1))
        with pytest.raises(NotFoundError):
            await service.delete(mock_db_session, make_user().id, MISSING_ID)

    @pytest.mark.asyncio
    async def test_delete_by_owner(self, mock_db_session, mock_store, make_product):
        product = make_product()
        mock_store.find_product_by_id.return_value = product
        service = ProductService(store=mock_store)

        assert await service.delete(mock_db_session, product.author_id, product.id) is None
        mock_store.delete_product.assert_awaited_once_with(mock_db_session, product.id)

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(self, mock_db_session, mock_store, make_user, make_product):
        product = make_product()
        mock_store.find_product_by_id.return_value = product
        service = ProductService(store=mock_store)

        with pytest.raises(AuthorizationError):
            await service.delete(mock_db_session, make_user().id, product.id)
        mock_store.delete_product.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, mock_db_session, mock_store, make_product):
        product = make_product()
        mock_store.find_product_by_id.return_value = product
        mock_store.delete_product.side_effect = DatabaseError(context={"operation": "delete_product"})
        service = ProductService(store=mock_store)

        with pytest.raises(DatabaseError) as exc_info:
            await service.delete(mock_db_session, product.author_id, product.id)
        assert exc_info.value.status_code == 500
