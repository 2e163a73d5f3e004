"""Liveness / database reachability probe (no auth)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from inventory_api.api.deps import get_store
from inventory_api.db.store import CredentialStore
from inventory_api.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(response: Response, store: CredentialStore = Depends(get_store)) -> HealthResponse:
    db_ok = await store.ping()
    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="ok" if db_ok else "degraded", db=db_ok)
