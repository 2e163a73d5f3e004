"""
FastAPI dependencies — store / token service lookup and the auth guard.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from fastapi.security.utils import get_authorization_scheme_param

from inventory_api.core.exceptions import AuthInvalidError, AuthMissingError
from inventory_api.core.security import TokenClaims, TokenService
from inventory_api.db.store import CredentialStore

# Raw header: any "<scheme> <token>" pair goes to verification, not just Bearer
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_store(request: Request) -> CredentialStore:
    return request.app.state.store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Depends(authorization_header),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Decode the bearer token and attach its identity to the request.

    No ``<scheme> <token>`` pair is a 401; a token that fails
    verification (forged, malformed or expired) is a 403.
    """
    _scheme, token = get_authorization_scheme_param(authorization)
    if not token:
        raise AuthMissingError()

    claims = tokens.verify(token)
    if claims is None:
        raise AuthInvalidError()

    request.state.user = claims
    return claims
