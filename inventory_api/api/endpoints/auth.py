"""
Auth endpoints — signup & login (JSON body, bearer token out).
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, status

from inventory_api.api.deps import get_store, get_token_service
from inventory_api.core.exceptions import (
    APIError,
    ConflictError,
    CredentialMismatchError,
    UniqueViolationError,
    UnknownUserError,
    ValidationFailedError,
)
from inventory_api.core.security import TokenService, get_password_hash, verify_password
from inventory_api.db.store import CredentialStore
from inventory_api.schemas.auth import LoginRequest, MessageResponse, SignupRequest, TokenResponse

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    store: CredentialStore = Depends(get_store),
) -> MessageResponse:
    """Register a new user.  Does not log the user in."""
    if not body.username or not body.email or not body.password:
        raise ValidationFailedError("Username, email, and password are required")

    # bcrypt is CPU-bound; keep it off the event loop
    try:
        password_hash = await asyncio.to_thread(get_password_hash, body.password)
    except ValueError as exc:
        logger.error("Password hashing failed for %s: %s", body.username, exc)
        raise APIError(str(exc))
    try:
        await store.insert_user(body.username, body.email, password_hash)
    except UniqueViolationError:
        raise ConflictError("Username or email already exists")

    logger.info("Registered user %s", body.username)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    store: CredentialStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Exchange username / password for a one-hour access token."""
    user = await store.find_user_by_username(body.username) if body.username else None
    if user is None:
        logger.info("Login for unknown user %s", body.username)
        raise UnknownUserError()

    if not await asyncio.to_thread(verify_password, body.password, user.password_hash):
        logger.info("Invalid password for user %s", user.username)
        raise CredentialMismatchError()

    return TokenResponse(token=tokens.issue(user.id, user.username))
