"""
XYFORA Backend — Product Route Handlers
========================================

    GET    /products        the caller's products, newest first
    POST   /products        create a product owned by the caller (201)
    GET    /products/{id}   read one product
    PUT    /products/{id}   partial update, owner only
    DELETE /products/{id}   delete, owner only (204)

Dependency order matters: `get_current_user_id` (401) runs before
`get_product_id` (400), and both run before `json_body` reads the request
body and before any database access.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from xyfora.database import get_db_session
from xyfora.routes.dependencies import (
    get_current_user_id,
    get_product_id,
    json_body,
    request_body_schema,
)
from xyfora.schemas.common import ErrorResponse
from xyfora.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from xyfora.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

_UNAUTHORIZED = {401: {"description": "Unauthorized", "model": ErrorResponse}}
_BAD_ID = {400: {"description": "Invalid product ID format", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_FORBIDDEN = {403: {"description": "Forbidden (user is not the author)", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={**_UNAUTHORIZED},
    summary="Get all products of the current user",
)
async def list_products(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_for_owner(db, user_id)


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses={
        400: {"description": "Bad request (missing fields)", "model": ErrorResponse},
        **_UNAUTHORIZED,
        **_SERVER_ERROR,
    },
    summary="Create a new product",
    openapi_extra=request_body_schema(ProductCreate),
)
async def create_product(
    user_id: str = Depends(get_current_user_id),
    payload: ProductCreate = Depends(json_body(ProductCreate)),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create(db, user_id, payload)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_BAD_ID, **_UNAUTHORIZED, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a single product by ID",
)
async def get_product(
    user_id: str = Depends(get_current_user_id),
    product_id: str = Depends(get_product_id),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get(db, product_id)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "At least one field is required or invalid ID", "model": ErrorResponse},
        **_UNAUTHORIZED,
        **_FORBIDDEN,
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Update a product (title and/or price)",
    openapi_extra=request_body_schema(ProductUpdate),
)
async def update_product(
    user_id: str = Depends(get_current_user_id),
    product_id: str = Depends(get_product_id),
    payload: ProductUpdate = Depends(json_body(ProductUpdate)),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.update(db, user_id, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=204,
    response_class=Response,
    responses={**_BAD_ID, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a product by ID",
)
async def delete_product(
    user_id: str = Depends(get_current_user_id),
    product_id: str = Depends(get_product_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await product_service.delete(db, user_id, product_id)
    return Response(status_code=204)
