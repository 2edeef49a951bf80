"""
CodeMatch Deployment Health Check
=================================
Reports API version, store backend and database connectivity.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from codematch import config
from codematch.storage import MatchStore, get_store

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


class HealthCheckResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    api_version: str
    store_backend: str
    database_connected: bool
    endpoints_registered: List[str]


@router.get("", response_model=HealthCheckResponse)
def check_health(request: Request, store: MatchStore = Depends(get_store)):
    """
    Deployment health check.

    status is "degraded" when the store cannot be reached.
    """
    connected = store.ping()
    endpoints = sorted({
        route.path
        for route in request.app.routes
        if route.path.startswith("/api/")
    })

    return HealthCheckResponse(
        status="healthy" if connected else "degraded",
        timestamp=datetime.utcnow().isoformat() + "Z",
        api_version=config.API_VERSION,
        store_backend=store.backend,
        database_connected=connected,
        endpoints_registered=endpoints,
    )
