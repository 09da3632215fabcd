"""API route exports."""

from seo_grader.api.routes.grading import router as grading_router
from seo_grader.api.routes.health import router as health_router

__all__ = ["grading_router", "health_router"]
