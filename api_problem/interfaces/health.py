"""
Liveness endpoint for the problem service.

Reports the running version from the settings the application was
built with, so probes can tell deployments apart.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthStatus(BaseModel):
    """Body of GET /health."""

    status: str
    version: str


@router.get("/health", response_model=HealthStatus, summary="Liveness probe")
def read_health(request: Request) -> HealthStatus:
    """Report that the app is up and which version is serving."""
    return HealthStatus(status="ok", version=request.app.state.settings.version)
