"""
XYFORA Backend — User Service
==============================

What:  Registration, login and "who am I" for the /auth endpoints.
How:   Composes password hashing, the token service and the record store.

Failure mapping:
    register:      duplicate email          → ConflictError (400)
    authenticate:  unknown email / bad pwd  → AuthenticationError (401),
                   same message for both so accounts cannot be enumerated
    profile:       token for a missing user → AuthenticationError (401)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from xyfora.exceptions import AuthenticationError, ConflictError
from xyfora.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from xyfora.services.passwords import hash_password, verify_password
from xyfora.services.record_store import record_store
from xyfora.services.token_service import token_service

logger = logging.getLogger(__name__)


class UserService:

    async def register(self, db: AsyncSession, data: RegisterRequest) -> AuthResponse:
        """
        Create an account and return it with a fresh token.

        The email lookup catches the common duplicate; the unique constraint
        (surfaced by the store as ConflictError) catches concurrent ones.
        """
        existing = await record_store.find_user_by_email(db, data.email)
        if existing is not None:
            raise ConflictError(message="User already exists", context={"field": "email"})

        user = await record_store.create_user(
            db,
            fullname=data.fullname,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        logger.info("User registered: %s", user.id)

        return AuthResponse(
            id=user.id,
            fullname=user.fullname,
            email=user.email,
            token=token_service.sign(user.id),
        )

    async def authenticate(self, db: AsyncSession, data: LoginRequest) -> AuthResponse:
        user = await record_store.find_user_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password):
            raise AuthenticationError(message="Invalid credentials")

        logger.info("User logged in: %s", user.id)
        return AuthResponse(
            id=user.id,
            fullname=user.fullname,
            email=user.email,
            token=token_service.sign(user.id),
        )

    async def profile(self, db: AsyncSession, user_id: str) -> UserResponse:
        user = await record_store.find_user_by_id(db, user_id)
        if user is None:
            raise AuthenticationError(message="Invalid token")
        return UserResponse.model_validate(user)


user_service = UserService()
