"""Data models for SEO grading."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CheckStatus(str, Enum):
    """Verdict of a single check."""

    PASS = "Pass"
    FAIL = "Fail"
    WARNING = "Warning"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one SEO rule evaluation."""

    factor: str
    result: CheckStatus
    details: str

    def to_dict(self) -> dict:
        return {
            "factor": self.factor,
            "result": self.result.value,
            "details": self.details,
        }


@dataclass
class CheckOutcome:
    """Everything a single pipeline step contributes to a report.

    A step may record several results (e.g. presence, length and keyword
    checks for the title) and any number of recommendations. `earned` is the
    sum of the weights awarded by its passing results.
    """

    results: list[CheckResult] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    earned: int = 0

    def passed(self, factor: str, details: str, weight: int = 0) -> None:
        """Record a Pass and award `weight`."""
        self.results.append(CheckResult(factor, CheckStatus.PASS, details))
        self.earned += weight

    def failed(
        self, factor: str, details: str, recommendation: Optional[str] = None
    ) -> None:
        """Record a Fail, optionally with a remediation."""
        self.results.append(CheckResult(factor, CheckStatus.FAIL, details))
        if recommendation:
            self.recommendations.append(recommendation)

    def warned(
        self, factor: str, details: str, recommendation: Optional[str] = None
    ) -> None:
        """Record a Warning, optionally with a remediation."""
        self.results.append(CheckResult(factor, CheckStatus.WARNING, details))
        if recommendation:
            self.recommendations.append(recommendation)


@dataclass(frozen=True)
class AnalysisReport:
    """Final result of grading one document."""

    score: int
    checks: tuple[CheckResult, ...] = ()
    recommendations: tuple[str, ...] = ()

    def results_for(self, factor: str) -> list[CheckResult]:
        """Return every recorded result for `factor`, in evaluation order."""
        return [check for check in self.checks if check.factor == factor]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "checks": [check.to_dict() for check in self.checks],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PageSummary:
    """Current on-page copy used as context for suggestion prompts."""

    title: str = ""
    meta_description: str = ""
    h1: str = ""
    first_paragraph: str = ""


@dataclass(frozen=True)
class OptimizationSuggestions:
    """Suggested replacement title and meta description."""

    suggested_title: str
    suggested_meta_description: str

    def to_dict(self) -> dict:
        return {
            "suggestedTitle": self.suggested_title,
            "suggestedMetaDescription": self.suggested_meta_description,
        }
