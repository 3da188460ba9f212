"""
XYFORA Backend — Route Dependencies
====================================

FastAPI dependencies that run the first two access guard steps before a
handler body executes:

    user_id:    401 when no verified identity is present
    product_id: 400 when the path id is not a 24-hex id (no store access)
    json_body:  400 when the body is not JSON or fails its model

FastAPI parses declared body parameters before any dependency runs, so
product bodies are read by `json_body` instead. Declared after the identity
and id dependencies, it only touches the body once both have passed.
"""

from typing import Optional, Type, TypeVar

from fastapi import Path, Request, Security
from fastapi.exceptions import RequestValidationError
from fastapi.security import APIKeyHeader
from pydantic import ValidationError as PydanticValidationError

from xyfora.exceptions import AuthenticationError, ValidationError
from xyfora.schemas.common import RequestModel
from xyfora.services.access_guard import access_guard

ModelT = TypeVar("ModelT", bound=RequestModel)

# Raw header, so the guard sees exactly what the client sent.
# Registered as a security scheme so /docs offers an "Authorize" button.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token: `Bearer <token>`",
)


def get_current_user_id(
    authorization: Optional[str] = Security(authorization_header),
) -> str:
    user_id = access_guard.extract_identity(authorization)
    if user_id is None:
        raise AuthenticationError()
    return user_id


def get_product_id(
    product_id: str = Path(
        description="24-hex product identifier",
        examples=["64f3b2c4e1234567890abcde"],
    ),
) -> str:
    cleaned = access_guard.sanitize_resource_id(product_id)
    if not access_guard.is_valid_resource_id(cleaned):
        raise ValidationError(message="Invalid product ID format", field="id")
    # Stored ids are lowercase hex
    return cleaned.lower()


def json_body(model: Type[ModelT]):
    """
    Build a dependency that parses the request body into `model`.

    Failures are raised as RequestValidationError with `body`-prefixed
    locations, the same shape FastAPI produces for declared bodies.
    """

    async def read_body(request: Request) -> ModelT:
        try:
            data = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
            )

        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise RequestValidationError(
                [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
            )

    return read_body


def request_body_schema(model: Type[RequestModel]) -> dict:
    """OpenAPI `requestBody` for routes that read their body via json_body."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }
