"""Title and meta description suggestions from a text-generation provider."""

import asyncio
import logging
from typing import Optional

from seo_grader.config import GradingThresholds, default_thresholds
from seo_grader.document import Document
from seo_grader.exceptions import ProviderUnavailable, SuggestionFailure
from seo_grader.grader import require_input
from seo_grader.llm import LLMClient
from seo_grader.models import OptimizationSuggestions, PageSummary

logger = logging.getLogger(__name__)


def summarize_page(
    html_content: str, thresholds: GradingThresholds = default_thresholds
) -> PageSummary:
    """Collect the current on-page copy that gives the prompts context."""
    document = Document(html_content)

    description_tag = document.first('meta[name="description"]')
    description = ""
    if description_tag is not None:
        description = (document.attribute(description_tag, "content") or "").strip()

    h1 = document.first("h1")
    paragraph = document.first("p")

    return PageSummary(
        title=document.text("title"),
        meta_description=description,
        h1=document.text(h1) if h1 is not None else "",
        first_paragraph=(
            document.text(paragraph)[:thresholds.paragraph_snippet]
            if paragraph is not None else ""
        ),
    )


def build_title_prompt(
    keyword: str, page: PageSummary, thresholds: GradingThresholds = default_thresholds
) -> str:
    return f"""Generate an SEO-optimized title tag for a web page.
- Primary Keyword: "{keyword}"
- Current Title: "{page.title}"
- Main Heading (H1): "{page.h1}"
- Constraints: Include the keyword naturally. Aim for {thresholds.title_min}-{thresholds.title_max} characters. Be compelling and relevant.
- Output only the suggested title text, nothing else."""


def build_meta_description_prompt(
    keyword: str, page: PageSummary, thresholds: GradingThresholds = default_thresholds
) -> str:
    low, high = thresholds.meta_description_min, thresholds.meta_description_max
    return f"""Generate an SEO-optimized meta description for a web page.
- Primary Keyword: "{keyword}"
- Current Title: "{page.title}"
- Current Meta Description: "{page.meta_description}"
- Main Heading (H1): "{page.h1}"
- First Paragraph Snippet: "{page.first_paragraph}..."
- Constraints: Include the keyword naturally. Aim for {low}-{high} characters. Write compelling text that encourages clicks.
- Output only the suggested meta description text, nothing else."""


class SuggestionRequester:
    """Asks the provider for a better title and meta description.

    The provider client is optional; without it every request fails with
    ProviderUnavailable before anything else happens.
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        thresholds: Optional[GradingThresholds] = None,
    ):
        self.llm = llm
        self.thresholds = thresholds or default_thresholds

    @property
    def available(self) -> bool:
        return self.llm is not None

    async def suggest_optimizations(
        self, html_content: str, keyword: str
    ) -> OptimizationSuggestions:
        """Generate title and meta description suggestions concurrently.

        Args:
            html_content: Raw HTML markup
            keyword: Target keyword

        Returns:
            OptimizationSuggestions with both texts

        Raises:
            ProviderUnavailable: If no provider client is configured
            InvalidInput: If either argument is empty
            SuggestionFailure: If either suggestion could not be produced
        """
        if self.llm is None:
            raise ProviderUnavailable("Text generation provider not configured. Missing API key.")
        require_input(html_content, keyword)

        logger.info(f'Optimizing for keyword: "{keyword}" using {self.llm.provider}...')
        page = summarize_page(html_content, self.thresholds)
        prompts = (
            build_title_prompt(keyword, page, self.thresholds),
            build_meta_description_prompt(keyword, page, self.thresholds),
        )

        # Both calls settle before we look at either result
        title_result, description_result = await asyncio.gather(
            *(self.llm.generate(prompt) for prompt in prompts),
            return_exceptions=True,
        )

        suggested_title = self._settle(title_result, "title")
        suggested_description = self._settle(description_result, "meta description")

        if not suggested_title or not suggested_description:
            logger.error("Failed to extract text from one or both provider responses.")
            raise SuggestionFailure(
                "Failed to generate one or more suggestions.",
                suggested_title=suggested_title,
                suggested_meta_description=suggested_description,
            )

        logger.info("Optimization suggestions generated successfully.")
        return OptimizationSuggestions(
            suggested_title=suggested_title,
            suggested_meta_description=suggested_description,
        )

    @staticmethod
    def _settle(result, label: str) -> Optional[str]:
        """Turn a gathered result into text, or None for a failed slot."""
        if isinstance(result, BaseException):
            logger.error(f"Provider call for {label} suggestion failed: {result}")
            return None
        return result or None
