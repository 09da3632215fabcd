"""Errors raised by the grader and the suggestion requester."""

from typing import Optional


class SEOGraderError(Exception):
    """Base class for all grader errors."""


class InvalidInput(SEOGraderError):
    """Required input (HTML content or keyword) was missing or empty."""


class AnalysisFailure(SEOGraderError):
    """An unexpected fault occurred while scoring a document."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details


class ProviderUnavailable(SEOGraderError):
    """No text-generation provider credential is configured."""


class SuggestionFailure(SEOGraderError):
    """One or both suggestions could not be generated.

    Whatever text was recovered is kept on the exception so callers can
    still show it.
    """

    def __init__(
        self,
        message: str,
        suggested_title: Optional[str] = None,
        suggested_meta_description: Optional[str] = None,
    ):
        super().__init__(message)
        self.suggested_title = suggested_title
        self.suggested_meta_description = suggested_meta_description
