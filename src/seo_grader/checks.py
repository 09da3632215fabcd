"""On-page SEO checks.

Each check is a plain function taking a PageContext and returning a
CheckOutcome. Checks never raise for missing structure: a page without a
title, headers or images is scored, not rejected. CHECK_PIPELINE fixes the
evaluation order, which is also the display order of the results.
"""

from functools import cached_property
from typing import Callable, Mapping

from seo_grader.config import GradingThresholds, default_thresholds
from seo_grader.constants import (
    ABSOLUTE_LINK_PREFIXES,
    DOCTYPE_TOKEN,
    FACTOR_CANONICAL,
    FACTOR_CONTENT_LENGTH,
    FACTOR_DOCTYPE,
    FACTOR_EXTERNAL_LINKS,
    FACTOR_H1_PRESENCE,
    FACTOR_HEADER_HIERARCHY,
    FACTOR_IMAGE_ALT,
    FACTOR_IMAGE_ALT_PRESENCE,
    FACTOR_KEYWORD_DENSITY,
    FACTOR_KEYWORD_EARLY,
    FACTOR_KEYWORD_IN_ALT,
    FACTOR_KEYWORD_IN_H1,
    FACTOR_KEYWORD_IN_META,
    FACTOR_KEYWORD_IN_TITLE,
    FACTOR_LINKS_PRESENCE,
    FACTOR_META_LENGTH,
    FACTOR_META_PRESENCE,
    FACTOR_SCHEMA,
    FACTOR_TITLE_LENGTH,
    FACTOR_TITLE_PRESENCE,
    FACTOR_VIEWPORT,
    HEADER_SELECTOR,
    TRAILING_PUNCTUATION,
    UNKNOWN_IMAGE_SOURCE,
)
from seo_grader.document import Document
from seo_grader.models import CheckOutcome


def includes_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive substring match; False when either side is empty."""
    if not text or not keyword:
        return False
    return keyword.lower() in text.lower()


def normalize_token(word: str) -> str:
    """Lowercase a word and strip one trailing punctuation mark."""
    lowered = word.lower()
    if lowered and lowered[-1] in TRAILING_PUNCTUATION:
        return lowered[:-1]
    return lowered


class PageContext:
    """Inputs shared by every check in one evaluation pass."""

    def __init__(
        self,
        document: Document,
        keyword: str,
        weights: Mapping[str, int],
        thresholds: GradingThresholds = default_thresholds,
    ):
        self.document = document
        self.keyword = keyword
        self.weights = weights
        self.thresholds = thresholds

    @cached_property
    def words(self) -> list[str]:
        """Whitespace-separated words of the page body."""
        return self.document.text("body").split()


Check = Callable[[PageContext], CheckOutcome]


# =============================================================================
# Technical Basics
# =============================================================================


def check_doctype(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    if page.document.starts_with(DOCTYPE_TOKEN):
        outcome.passed(FACTOR_DOCTYPE, "<!DOCTYPE html> found.", page.weights["doctype"])
    else:
        outcome.failed(
            FACTOR_DOCTYPE,
            "<!DOCTYPE html> declaration missing or incorrect.",
            "Add the <!DOCTYPE html> declaration at the very beginning of your HTML document.",
        )
    return outcome


def check_viewport(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    if page.document.query('meta[name="viewport"]'):
        outcome.passed(FACTOR_VIEWPORT, '<meta name="viewport"> found.', page.weights["viewport"])
    else:
        outcome.failed(
            FACTOR_VIEWPORT,
            '<meta name="viewport"> tag is missing.',
            'Add a <meta name="viewport" content="width=device-width, initial-scale=1.0"> '
            'tag to the <head> for mobile responsiveness.',
        )
    return outcome


def check_canonical(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    if page.document.query('link[rel="canonical"]'):
        outcome.passed(FACTOR_CANONICAL, '<link rel="canonical"> found.', page.weights["canonical"])
    else:
        outcome.warned(
            FACTOR_CANONICAL,
            '<link rel="canonical"> tag is missing.',
            'Consider adding a <link rel="canonical" href="YOUR_PREFERRED_URL"> tag to the '
            '<head> to specify the preferred version of this page, especially if content '
            'might be duplicated.',
        )
    return outcome


def check_schema_markup(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    if page.document.query('script[type="application/ld+json"]'):
        outcome.passed(
            FACTOR_SCHEMA,
            '<script type="application/ld+json"> found.',
            page.weights["schema_markup"],
        )
    else:
        outcome.warned(
            FACTOR_SCHEMA,
            'No <script type="application/ld+json"> tags found.',
            'Consider adding Schema.org markup using JSON-LD to help search engines '
            'understand your content structure (e.g., for articles, products, events).',
        )
    return outcome


# =============================================================================
# Title & Meta Description
# =============================================================================


def check_title(page: PageContext) -> CheckOutcome:
    """Title presence, length and keyword usage."""
    outcome = CheckOutcome()
    title = page.document.text("title")
    keyword = page.keyword

    if not title:
        outcome.failed(
            FACTOR_TITLE_PRESENCE,
            "No <title> tag found or it is empty.",
            "Add a descriptive <title> tag within the <head> section.",
        )
        outcome.failed(FACTOR_TITLE_LENGTH, "Cannot assess length without a title.")
        outcome.failed(FACTOR_KEYWORD_IN_TITLE, "Cannot assess keyword without a title.")
        return outcome

    outcome.passed(FACTOR_TITLE_PRESENCE, f'Title found: "{title}"', page.weights["title_presence"])

    low, high = page.thresholds.title_min, page.thresholds.title_max
    length = len(title)
    if low <= length <= high:
        outcome.passed(
            FACTOR_TITLE_LENGTH,
            f"Length is {length} characters (optimal).",
            page.weights["title_length"],
        )
    elif length > high:
        outcome.warned(
            FACTOR_TITLE_LENGTH,
            f"Length is {length} characters (too long, may be truncated). Aim for {low}-{high}.",
            f"Shorten your title tag to {low}-{high} characters. Current length: {length}.",
        )
    else:
        outcome.warned(
            FACTOR_TITLE_LENGTH,
            f"Length is {length} characters (short). Aim for {low}-{high}.",
            f"Consider lengthening your title tag to {low}-{high} characters for better "
            f"visibility. Current length: {length}.",
        )

    if includes_keyword(title, keyword):
        outcome.passed(
            FACTOR_KEYWORD_IN_TITLE,
            f'Keyword "{keyword}" found in title.',
            page.weights["keyword_in_title"],
        )
    else:
        outcome.failed(
            FACTOR_KEYWORD_IN_TITLE,
            f'Keyword "{keyword}" not found in title.',
            f'Include your primary keyword "{keyword}" in the <title> tag.',
        )
    return outcome


def check_meta_description(page: PageContext) -> CheckOutcome:
    """Meta description presence, length and keyword usage."""
    outcome = CheckOutcome()
    keyword = page.keyword
    tag = page.document.first('meta[name="description"]')
    description = ""
    if tag is not None:
        description = (page.document.attribute(tag, "content") or "").strip()

    if not description:
        outcome.failed(
            FACTOR_META_PRESENCE,
            'No <meta name="description"> tag found or content is empty.',
            'Add a compelling <meta name="description"> tag within the <head> section.',
        )
        outcome.failed(FACTOR_META_LENGTH, "Cannot assess length without a meta description.")
        outcome.failed(FACTOR_KEYWORD_IN_META, "Cannot assess keyword without a meta description.")
        return outcome

    outcome.passed(
        FACTOR_META_PRESENCE,
        "Meta description found.",
        page.weights["meta_description_presence"],
    )

    low = page.thresholds.meta_description_min
    high = page.thresholds.meta_description_max
    length = len(description)
    if low <= length <= high:
        outcome.passed(
            FACTOR_META_LENGTH,
            f"Length is {length} characters (optimal).",
            page.weights["meta_description_length"],
        )
    elif length > high:
        outcome.warned(
            FACTOR_META_LENGTH,
            f"Length is {length} characters (too long, may be truncated). Aim for {low}-{high}.",
            f"Shorten your meta description to {low}-{high} characters. Current length: {length}.",
        )
    else:
        outcome.warned(
            FACTOR_META_LENGTH,
            f"Length is {length} characters (short). Aim for {low}-{high}.",
            f"Consider lengthening your meta description to {low}-{high} characters. "
            f"Current length: {length}.",
        )

    if includes_keyword(description, keyword):
        outcome.passed(
            FACTOR_KEYWORD_IN_META,
            f'Keyword "{keyword}" found in meta description.',
            page.weights["keyword_in_meta_description"],
        )
    else:
        outcome.failed(
            FACTOR_KEYWORD_IN_META,
            f'Keyword "{keyword}" not found in meta description.',
            f'Include your primary keyword "{keyword}" in the meta description.',
        )
    return outcome


# =============================================================================
# Headings
# =============================================================================


def check_h1(page: PageContext) -> CheckOutcome:
    """Exactly one H1, and the keyword inside it."""
    outcome = CheckOutcome()
    keyword = page.keyword
    h1_tags = page.document.query("h1")

    if not h1_tags:
        outcome.failed(
            FACTOR_H1_PRESENCE,
            "No H1 tag found.",
            "Add one (and only one) H1 tag to represent the main heading of your page.",
        )
        outcome.failed(FACTOR_KEYWORD_IN_H1, "Cannot assess keyword without an H1.")
        return outcome

    if len(h1_tags) > 1:
        outcome.failed(
            FACTOR_H1_PRESENCE,
            f"Found {len(h1_tags)} H1 tags. Only one should be used.",
            "Use only one H1 tag per page for the main heading. Convert other H1s to H2s or lower.",
        )
        outcome.failed(
            FACTOR_KEYWORD_IN_H1,
            "Cannot assess keyword reliably with multiple H1 tags.",
        )
        return outcome

    h1_text = page.document.text(h1_tags[0])
    outcome.passed(
        FACTOR_H1_PRESENCE,
        f'Exactly one H1 tag found: "{h1_text}"',
        page.weights["h1_presence"],
    )
    if includes_keyword(h1_text, keyword):
        outcome.passed(
            FACTOR_KEYWORD_IN_H1,
            f'Keyword "{keyword}" found in H1.',
            page.weights["keyword_in_h1"],
        )
    else:
        outcome.failed(
            FACTOR_KEYWORD_IN_H1,
            f'Keyword "{keyword}" not found in H1.',
            f'Include your primary keyword "{keyword}" in the main H1 heading.',
        )
    return outcome


def check_header_hierarchy(page: PageContext) -> CheckOutcome:
    """Headings must not skip a level when descending.

    Only the first violation is reported.
    """
    outcome = CheckOutcome()
    headers = page.document.query(HEADER_SELECTOR)
    violation_found = False
    last_level = 1

    for header in headers:
        level = int(header.name[1])
        if level > last_level + 1:
            violation_found = True
            outcome.failed(
                FACTOR_HEADER_HIERARCHY,
                f"Skipped header level: Found <{header.name}> after level H{last_level}.",
                "Ensure header tags follow a logical hierarchy (H1 > H2 > H3...). Avoid "
                "skipping levels, like using an H3 directly after an H1.",
            )
            break
        last_level = level

    if violation_found:
        return outcome

    if headers:
        outcome.passed(
            FACTOR_HEADER_HIERARCHY,
            "Header tags follow a logical hierarchy.",
            page.weights["header_hierarchy"],
        )
    else:
        outcome.warned(
            FACTOR_HEADER_HIERARCHY,
            "No header tags (H1-H6) found to assess hierarchy.",
            "Use header tags (H1-H6) to structure your content logically.",
        )
    return outcome


# =============================================================================
# Content
# =============================================================================


def check_content_length(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    minimum = page.thresholds.min_word_count
    word_count = len(page.words)

    if word_count >= minimum:
        outcome.passed(
            FACTOR_CONTENT_LENGTH,
            f"Word count is {word_count} (meets minimum of {minimum}).",
            page.weights["content_length"],
        )
    else:
        outcome.warned(
            FACTOR_CONTENT_LENGTH,
            f"Word count is {word_count} (below recommended minimum of {minimum}).",
            f"Consider expanding your content. Aim for at least {minimum} words for better "
            f"SEO potential. Current count: {word_count}.",
        )
    return outcome


def check_keyword_in_opening(page: PageContext) -> CheckOutcome:
    """Keyword within the first ~100 words of body text."""
    outcome = CheckOutcome()
    keyword = page.keyword
    opening = " ".join(page.words[:page.thresholds.opening_words])

    if includes_keyword(opening, keyword):
        outcome.passed(
            FACTOR_KEYWORD_EARLY,
            f'Keyword "{keyword}" found early in the content.',
            page.weights["keyword_in_first_paragraph"],
        )
    else:
        outcome.warned(
            FACTOR_KEYWORD_EARLY,
            f'Keyword "{keyword}" not found in the first ~{page.thresholds.opening_words} words.',
            f'Try to include your primary keyword "{keyword}" naturally near the beginning '
            f'of your main content.',
        )
    return outcome


def keyword_density(words: list[str], keyword: str) -> float:
    """Percentage of words that exactly match the keyword.

    A word matches when, lowercased and with one trailing punctuation mark
    removed, it equals the lowercased keyword.
    """
    if not words:
        return 0.0
    target = keyword.lower()
    count = sum(1 for word in words if normalize_token(word) == target)
    return count / len(words) * 100


def check_keyword_density(page: PageContext) -> CheckOutcome:
    outcome = CheckOutcome()
    keyword = page.keyword
    low = page.thresholds.keyword_density_min
    high = page.thresholds.keyword_density_max
    density = keyword_density(page.words, keyword)
    aim = f"Aim for {low:g}-{high:g}%."

    if low <= density <= high:
        outcome.passed(
            FACTOR_KEYWORD_DENSITY,
            f"Density is {density:.2f}% (within {low:g}-{high:g}% range).",
            page.weights["keyword_density"],
        )
    elif density > high:
        outcome.warned(
            FACTOR_KEYWORD_DENSITY,
            f"Density is {density:.2f}% (potentially high, risk of stuffing). {aim}",
            f'Keyword density is high ({density:.2f}%). Ensure the keyword usage sounds '
            f'natural and avoid "keyword stuffing".',
        )
    else:
        outcome.warned(
            FACTOR_KEYWORD_DENSITY,
            f"Density is {density:.2f}% (low). {aim}",
            f'Keyword density is low ({density:.2f}%). Consider naturally incorporating '
            f'"{keyword}" a few more times if appropriate.',
        )
    return outcome


# =============================================================================
# Images & Links
# =============================================================================


def check_images(page: PageContext) -> CheckOutcome:
    """Alt text on every image, and the keyword in at least one of them.

    A page without images passes both checks with full weight.
    """
    outcome = CheckOutcome()
    keyword = page.keyword
    document = page.document
    images = document.query("img")

    if not images:
        outcome.passed(
            FACTOR_IMAGE_ALT_PRESENCE,
            "No images found on page.",
            page.weights["image_alt_text_presence"],
        )
        outcome.passed(
            FACTOR_KEYWORD_IN_ALT,
            "No images to check for keyword.",
            page.weights["keyword_in_alt_text"],
        )
        return outcome

    excerpt_length = page.thresholds.alt_source_excerpt
    missing_alt = 0
    keyword_in_alt = False

    for image in images:
        alt_text = (document.attribute(image, "alt") or "").strip()
        if not alt_text:
            missing_alt += 1
            source = (document.attribute(image, "src") or UNKNOWN_IMAGE_SOURCE)[:excerpt_length]
            outcome.failed(
                FACTOR_IMAGE_ALT,
                f'Image missing alt text: src="{source}..."',
                f"Add descriptive alt text to all images. Missing for: {source}...",
            )
        elif includes_keyword(alt_text, keyword):
            keyword_in_alt = True

    if missing_alt:
        outcome.failed(FACTOR_IMAGE_ALT_PRESENCE, "One or more images are missing alt text.")
    else:
        outcome.passed(
            FACTOR_IMAGE_ALT_PRESENCE,
            "All images have alt text.",
            page.weights["image_alt_text_presence"],
        )

    if keyword_in_alt:
        outcome.passed(
            FACTOR_KEYWORD_IN_ALT,
            f'Keyword "{keyword}" found in at least one alt text.',
            page.weights["keyword_in_alt_text"],
        )
    else:
        outcome.warned(
            FACTOR_KEYWORD_IN_ALT,
            f'Keyword "{keyword}" not found in any alt text.',
            f'Consider including the keyword "{keyword}" in the alt text of relevant images, '
            f'if it accurately describes the image.',
        )
    return outcome


def check_links(page: PageContext) -> CheckOutcome:
    """Link presence and at least one absolute (likely external) link."""
    outcome = CheckOutcome()
    links = page.document.query("a")

    if not links:
        outcome.warned(
            FACTOR_LINKS_PRESENCE,
            "No links (<a> tags) found.",
            "Consider adding relevant internal and external links to your content.",
        )
        outcome.warned(FACTOR_EXTERNAL_LINKS, "No links found to check for external ones.")
        return outcome

    outcome.passed(
        FACTOR_LINKS_PRESENCE,
        f"Found {len(links)} link(s) (<a> tags).",
        page.weights["links_internal"],
    )

    has_absolute_link = any(
        (page.document.attribute(link, "href") or "").startswith(ABSOLUTE_LINK_PREFIXES)
        for link in links
    )
    if has_absolute_link:
        outcome.passed(
            FACTOR_EXTERNAL_LINKS,
            "At least one absolute link (likely external) found.",
            page.weights["links_external"],
        )
    else:
        outcome.warned(
            FACTOR_EXTERNAL_LINKS,
            "No absolute links (starting with http/https) found.",
            "Consider adding links to relevant, authoritative external resources where appropriate.",
        )
    return outcome


CHECK_PIPELINE: tuple[Check, ...] = (
    check_doctype,
    check_viewport,
    check_canonical,
    check_schema_markup,
    check_title,
    check_meta_description,
    check_h1,
    check_header_hierarchy,
    check_content_length,
    check_keyword_in_opening,
    check_keyword_density,
    check_images,
    check_links,
)
