"""
XYFORA Backend — Auth Route Handlers
=====================================

    POST /auth/register   create an account, returns user + token (201)
    POST /auth/login      exchange credentials for a token (200)
    GET  /auth/me         the caller's public profile (bearer)

Handlers stay thin; UserService owns the rules and raises the application
exceptions that the global handlers turn into responses.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from xyfora.database import get_db_session
from xyfora.routes.dependencies import get_current_user_id
from xyfora.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from xyfora.schemas.common import ErrorResponse
from xyfora.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields or user already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.register(db, payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Malformed request body", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="User login",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.authenticate(db, payload)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"description": "Invalid or missing token", "model": ErrorResponse},
    },
    summary="Get current authenticated user",
)
async def me(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.profile(db, user_id)
