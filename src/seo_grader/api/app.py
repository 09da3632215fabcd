"""SEO Grader API - HTTP boundary for grading and suggestions."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from seo_grader import __version__
from seo_grader.api.routes import grading_router, health_router
from seo_grader.config import Settings, settings as default_settings
from seo_grader.constants import (
    META_SUGGESTION_PLACEHOLDER,
    TITLE_SUGGESTION_PLACEHOLDER,
)
from seo_grader.exceptions import (
    AnalysisFailure,
    InvalidInput,
    ProviderUnavailable,
    SuggestionFailure,
)
from seo_grader.grader import SEOGrader
from seo_grader.llm import build_llm_client
from seo_grader.optimizer import SuggestionRequester

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Code before `yield` runs on startup.
    Code after `yield` runs on shutdown.
    """
    logger.info(
        f"Starting SEO Grader {__version__} "
        f"(optimizer {'enabled' if app.state.requester.available else 'disabled'})"
    )
    yield
    logger.info("Shutting down SEO Grader...")


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    content = {"error": error}
    content.update({key: value for key, value in extra.items() if value is not None})
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Map grader errors onto JSON error responses."""

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Missing htmlContent or keyword in request body",
            details=str(exc.errors()),
        )

    @app.exception_handler(ProviderUnavailable)
    async def provider_unavailable_handler(request: Request, exc: ProviderUnavailable):
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))

    @app.exception_handler(AnalysisFailure)
    async def analysis_failure_handler(request: Request, exc: AnalysisFailure):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), details=exc.details)

    @app.exception_handler(SuggestionFailure)
    async def suggestion_failure_handler(request: Request, exc: SuggestionFailure):
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc),
            suggestions={
                "suggestedTitle": exc.suggested_title or TITLE_SUGGESTION_PLACEHOLDER,
                "suggestedMetaDescription": (
                    exc.suggested_meta_description or META_SUGGESTION_PLACEHOLDER
                ),
            },
        )


def create_app(
    grader: Optional[SEOGrader] = None,
    requester: Optional[SuggestionRequester] = None,
    config: Settings = default_settings,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        grader: Grader to serve (defaults to the standard weight table)
        requester: Suggestion requester (defaults to one built from env config)
        config: HTTP settings (CORS, body limit, static directory)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="SEO Grader API",
        description="On-page SEO grading with optional LLM-generated title and meta description suggestions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.grader = grader or SEOGrader()
    app.state.requester = requester or SuggestionRequester(build_llm_client())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    max_body_bytes = config.MAX_BODY_BYTES

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_body_bytes:
            return _error(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                f"Request body exceeds {max_body_bytes} bytes",
            )
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(grading_router)

    static_dir = Path(config.STATIC_DIR) if config.STATIC_DIR else None
    if static_dir and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        @app.get("/", include_in_schema=False)
        async def root():
            return {
                "service": "SEO Grader API",
                "docs": "/docs",
                "health": "/health",
            }

    return app
