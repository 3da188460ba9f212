"""
XYFORA Backend — Auth Schemas
==============================

Request bodies for /auth/register and /auth/login, and the user shapes the
auth endpoints return. No response model has a password field.
"""

from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from xyfora.schemas.common import RequestModel, ResponseModel

Fullname = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
# Passwords are taken verbatim; whitespace is significant.
Password = Annotated[str, StringConstraints(min_length=1, max_length=1024)]


class RegisterRequest(RequestModel):
    fullname: Fullname = Field(description="Display name", examples=["Ahmed Saleem"])
    email: EmailStr = Field(description="Login email, unique per account", examples=["ahmed@xyfora.se"])
    password: Password = Field(description="Plain-text password (hashed before storage)")


class LoginRequest(RequestModel):
    email: EmailStr = Field(examples=["info@xyfora.se"])
    password: Password


class UserResponse(ResponseModel):
    """Public view of a user. Returned by GET /auth/me."""
    id: str = Field(description="24-hex user identifier")
    fullname: str
    email: str


class AuthResponse(UserResponse):
    """Returned by register (201) and login (200)."""
    token: str = Field(description="Bearer token, valid for 7 days")
