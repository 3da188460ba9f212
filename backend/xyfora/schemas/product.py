"""
XYFORA Backend — Product Schemas
=================================

What:  Request bodies for creating/updating products and the product
       representation returned by every /products endpoint.

Field naming:
    Responses use camelCase (authorId, createdAt, updatedAt). The update body
    has no author field, so ownership cannot be changed through the API.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints, model_validator

from xyfora.schemas.common import RequestModel, ResponseModel

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class ProductCreate(RequestModel):
    title: Title = Field(examples=["My new product"])
    price: Price = Field(examples=[49.99])


class ProductUpdate(RequestModel):
    """Partial update. At least one of title/price must be supplied."""

    title: Optional[Title] = Field(default=None, examples=["Updated product title"])
    price: Optional[Price] = Field(default=None, examples=[99.99])

    @model_validator(mode="after")
    def require_one_field(self) -> "ProductUpdate":
        if self.title is None and self.price is None:
            raise ValueError("At least one field is required")
        return self

    def changes(self) -> dict:
        """Only the fields the client actually supplied."""
        return self.model_dump(exclude_none=True)


class AuthorSummary(ResponseModel):
    fullname: str
    email: str


class ProductResponse(ResponseModel):
    id: str = Field(description="24-hex product identifier")
    title: str
    price: float
    author_id: str = Field(description="Owning user's id")
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime
