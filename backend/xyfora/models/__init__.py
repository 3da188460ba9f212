"""ORM models. Importing this package registers every table on Base.metadata."""

from xyfora.models.product import Product
from xyfora.models.user import User

__all__ = ["Product", "User"]
