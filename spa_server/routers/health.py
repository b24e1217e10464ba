"""Health check endpoint."""

from fastapi import APIRouter, Depends, Response

from spa_server.config import Settings
from spa_server.dependencies import get_settings
from spa_server.headers import ResponseBranch, apply_cache_headers
from spa_server.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.api_route("/healthz", methods=["GET", "HEAD"], response_model=HealthResponse)
async def health_check(
    response: Response,
    settings: Settings = Depends(get_settings),
):
    """Liveness probe; independent of the served directories."""
    apply_cache_headers(response.headers, ResponseBranch.DYNAMIC, settings)
    return HealthResponse()
