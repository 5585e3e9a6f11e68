"""
Record Shop Backend — Account Route Handlers
==============================================

What:  POST /signup, POST /login, POST /logout.
How:   Login stores the signed session token in an HTTP-only `token` cookie;
       logout overwrites it with an empty, already-expired cookie.

Cookie attributes:
    path=/, httponly, secure (settings.cookie_secure),
    samesite=none when secure (front end and API live on different sites),
    domain=settings.api_domain when set, host-only otherwise.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.config import settings
from recordshop.database import get_db_session
from recordshop.schemas.common import ErrorResponse, MessageResponse
from recordshop.schemas.user import UserCredentials, UserResponse
from recordshop.security import TOKEN_COOKIE_NAME
from recordshop.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _set_token_cookie(response: Response, value: str, max_age: int) -> None:
    domain: Optional[str] = settings.api_domain or None
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=value,
        max_age=max_age,
        path="/",
        domain=domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="none" if settings.cookie_secure else "lax",
    )


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid email or password", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def sign_up(
    payload: UserCredentials,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.sign_up(db, payload)


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Log in and receive the session cookie",
)
async def log_in(
    payload: UserCredentials,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    token = await user_service.log_in(db, payload)
    _set_token_cookie(response, token, max_age=settings.cookie_max_age_hours * 3600)
    return MessageResponse(message="Logged in")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Clear the session cookie",
)
async def log_out(response: Response) -> MessageResponse:
    _set_token_cookie(response, "", max_age=0)
    return MessageResponse(message="Logged out")
