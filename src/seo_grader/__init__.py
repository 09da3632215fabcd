"""On-page SEO grader with LLM-generated title and meta description suggestions."""

__version__ = "0.1.0"

from seo_grader.document import Document
from seo_grader.grader import SEOGrader, analyze
from seo_grader.llm import LLMClient, build_llm_client
from seo_grader.optimizer import SuggestionRequester
from seo_grader.models import (
    AnalysisReport,
    CheckResult,
    CheckStatus,
    OptimizationSuggestions,
)
from seo_grader.exceptions import (
    SEOGraderError,
    InvalidInput,
    AnalysisFailure,
    ProviderUnavailable,
    SuggestionFailure,
)
from seo_grader.config import settings, Config, GradingThresholds
from seo_grader.constants import DEFAULT_WEIGHTS

__all__ = [
    # Core
    "Document",
    "SEOGrader",
    "analyze",
    "LLMClient",
    "build_llm_client",
    "SuggestionRequester",
    # Models
    "AnalysisReport",
    "CheckResult",
    "CheckStatus",
    "OptimizationSuggestions",
    # Errors
    "SEOGraderError",
    "InvalidInput",
    "AnalysisFailure",
    "ProviderUnavailable",
    "SuggestionFailure",
    # Configuration
    "settings",
    "Config",
    "GradingThresholds",
    "DEFAULT_WEIGHTS",
]
