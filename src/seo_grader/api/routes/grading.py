"""Analysis and optimization endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from seo_grader.api.schemas import (
    AnalysisResponse,
    ErrorResponse,
    GradeRequest,
    OptimizationResponse,
)
from seo_grader.exceptions import SEOGraderError
from seo_grader.grader import SEOGrader
from seo_grader.optimizer import SuggestionRequester

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Grading"])


def get_grader(request: Request) -> SEOGrader:
    return request.app.state.grader


def get_requester(request: Request) -> SuggestionRequester:
    return request.app.state.requester


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Grade an HTML document",
    description="Score the HTML against on-page SEO checks for the given keyword.",
)
def analyze(
    body: GradeRequest,
    grader: SEOGrader = Depends(get_grader),
) -> AnalysisResponse:
    """
    Run the check pipeline.

    Scoring is CPU-bound, so this is a plain def and runs in the
    threadpool rather than on the event loop.
    """
    logger.info("Received /analyze request")
    report = grader.analyze(body.html_content, body.keyword)
    return AnalysisResponse(**report.to_dict())


@router.post(
    "/optimize",
    response_model=OptimizationResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Suggest a better title and meta description",
    description="Ask the configured text-generation provider for optimized copy.",
)
async def optimize(
    body: GradeRequest,
    requester: SuggestionRequester = Depends(get_requester),
):
    """Generate both suggestions concurrently."""
    logger.info("Received /optimize request")
    try:
        suggestions = await requester.suggest_optimizations(body.html_content, body.keyword)
    except SEOGraderError:
        raise
    except Exception as e:
        logger.exception(f"Error during optimization: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to generate optimization suggestions.",
                "details": str(e),
            },
        )
    return OptimizationResponse(**suggestions.to_dict())
