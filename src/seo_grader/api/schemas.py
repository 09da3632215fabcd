"""Pydantic schemas for API request/response validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Request Schemas (what clients send to us)
# =============================================================================


class GradeRequest(BaseModel):
    """Request body shared by /analyze and /optimize."""

    model_config = ConfigDict(populate_by_name=True)

    html_content: Optional[str] = Field(
        default=None,
        alias="htmlContent",
        description="Raw HTML of the page to grade",
        examples=["<!DOCTYPE html><html><head><title>Coffee</title></head></html>"],
    )
    keyword: Optional[str] = Field(
        default=None,
        description="Target keyword",
        examples=["coffee"],
    )


# =============================================================================
# Response Schemas (what we send back to clients)
# =============================================================================


class CheckResultResponse(BaseModel):
    """A single check verdict."""

    factor: str
    result: str
    details: str


class AnalysisResponse(BaseModel):
    """Response for /analyze."""

    score: int = Field(..., ge=0, le=100)
    checks: list[CheckResultResponse]
    recommendations: list[str]


class OptimizationResponse(BaseModel):
    """Response for /optimize."""

    suggestedTitle: str
    suggestedMetaDescription: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: Optional[str] = None
    suggestions: Optional[OptimizationResponse] = None


# =============================================================================
# Health Check
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "healthy"
    service: str = "seo-grader"
    version: str
    optimizer: bool = Field(..., description="Whether suggestion generation is configured")
