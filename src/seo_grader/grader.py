"""SEO grader that scores one HTML document against on-page best practices."""

import logging
import math
from typing import Mapping, Optional, Sequence

from seo_grader.checks import CHECK_PIPELINE, Check, PageContext
from seo_grader.config import GradingThresholds, default_thresholds
from seo_grader.constants import DEFAULT_WEIGHTS
from seo_grader.document import Document
from seo_grader.exceptions import AnalysisFailure, InvalidInput
from seo_grader.models import AnalysisReport, CheckResult

logger = logging.getLogger(__name__)


def require_input(html_content: Optional[str], keyword: Optional[str]) -> None:
    """Reject missing or empty HTML content and keyword.

    Raises:
        InvalidInput: If either argument is empty or absent
    """
    if not html_content or not keyword:
        raise InvalidInput("Missing htmlContent or keyword in request body")
    if not isinstance(html_content, str) or not isinstance(keyword, str):
        raise InvalidInput("htmlContent and keyword must be strings")


def normalize_score(achieved: int, total: int) -> int:
    """Rescale achieved weight to 0-100, rounding halves up."""
    if total <= 0:
        return 0
    return int(math.floor(achieved / total * 100 + 0.5))


class SEOGrader:
    """Runs the check pipeline and reduces it to an AnalysisReport.

    The grader holds only read-only configuration (weights, thresholds and
    the pipeline itself), so one instance can serve any number of concurrent
    callers.
    """

    def __init__(
        self,
        weights: Optional[Mapping[str, int]] = None,
        thresholds: Optional[GradingThresholds] = None,
        pipeline: Sequence[Check] = CHECK_PIPELINE,
    ):
        """Initialize the grader.

        Args:
            weights: Weight table (defaults to DEFAULT_WEIGHTS)
            thresholds: Grading thresholds (defaults to default_thresholds)
            pipeline: Ordered checks to run

        Raises:
            ValueError: If the weight table is missing a key or has a
                non-positive weight
        """
        weights = dict(DEFAULT_WEIGHTS if weights is None else weights)
        self._validate_weights(weights)

        self.weights = weights
        self.total_weight = sum(weights.values())
        self.thresholds = thresholds or default_thresholds
        self.pipeline = tuple(pipeline)

    @staticmethod
    def _validate_weights(weights: Mapping[str, int]) -> None:
        missing = sorted(set(DEFAULT_WEIGHTS) - set(weights))
        if missing:
            raise ValueError(f"Weight table is missing keys: {', '.join(missing)}")

        for name, weight in weights.items():
            if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
                raise ValueError(f"Weight for '{name}' must be a positive integer, got {weight!r}")

    def analyze(self, html_content: str, keyword: str) -> AnalysisReport:
        """Grade an HTML document for a target keyword.

        Args:
            html_content: Raw HTML markup
            keyword: Target keyword

        Returns:
            AnalysisReport with score, checks and recommendations

        Raises:
            InvalidInput: If either argument is empty
            AnalysisFailure: If an unexpected fault occurs while scoring
        """
        require_input(html_content, keyword)
        logger.info(f'Analyzing HTML ({len(html_content)} chars) for keyword: "{keyword}"')

        try:
            page = PageContext(
                document=Document(html_content),
                keyword=keyword,
                weights=self.weights,
                thresholds=self.thresholds,
            )

            checks: list[CheckResult] = []
            recommendations: list[str] = []
            achieved = 0

            for check in self.pipeline:
                outcome = check(page)
                checks.extend(outcome.results)
                recommendations.extend(outcome.recommendations)
                achieved += outcome.earned

            score = normalize_score(achieved, self.total_weight)

        except Exception as e:
            logger.exception(f"Error during analysis: {e}")
            raise AnalysisFailure("Failed to analyze HTML content.", details=str(e)) from e

        logger.info(f"Analysis complete: score {score} ({achieved}/{self.total_weight})")
        return AnalysisReport(
            score=score,
            checks=tuple(checks),
            recommendations=tuple(recommendations),
        )


# Convenience function
def analyze(html_content: str, keyword: str) -> AnalysisReport:
    """Grade an HTML document with the default weights and thresholds."""
    return SEOGrader().analyze(html_content, keyword)
