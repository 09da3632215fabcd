"""Health check endpoint."""

from fastapi import APIRouter, Request

from seo_grader import __version__
from seo_grader.api.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is running and whether suggestions are available.",
)
async def health_check(request: Request) -> HealthResponse:
    """Return service health status."""
    return HealthResponse(
        version=__version__,
        optimizer=request.app.state.requester.available,
    )
