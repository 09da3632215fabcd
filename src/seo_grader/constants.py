# src/seo_grader/constants.py
"""Centralized constants for the SEO grader.

This module contains the default weight table, factor labels and the
magic numbers used by the check pipeline. For user-configurable thresholds,
see config.py and GradingThresholds.
"""

# =============================================================================
# Check Weights
# =============================================================================

# Score contribution awarded when each check's condition is satisfied
DEFAULT_WEIGHTS = {
    "doctype": 2,
    "viewport": 2,
    "title_presence": 5,
    "title_length": 3,
    "keyword_in_title": 8,
    "meta_description_presence": 5,
    "meta_description_length": 3,
    "keyword_in_meta_description": 7,
    "h1_presence": 6,
    "keyword_in_h1": 7,
    "header_hierarchy": 4,
    "keyword_in_first_paragraph": 6,
    "content_length": 5,
    "image_alt_text_presence": 5,
    "keyword_in_alt_text": 4,
    "links_internal": 3,  # awarded for general link presence
    "links_external": 3,
    "keyword_density": 5,
    "canonical": 3,
    "schema_markup": 4,
}


# =============================================================================
# Factor Labels (display names of the checks, in evaluation order)
# =============================================================================

FACTOR_DOCTYPE = "DOCTYPE Presence"
FACTOR_VIEWPORT = "Viewport Meta Tag"
FACTOR_CANONICAL = "Canonical Tag"
FACTOR_SCHEMA = "Schema Markup (JSON-LD)"
FACTOR_TITLE_PRESENCE = "Title Tag Presence"
FACTOR_TITLE_LENGTH = "Title Length"
FACTOR_KEYWORD_IN_TITLE = "Keyword in Title"
FACTOR_META_PRESENCE = "Meta Description Presence"
FACTOR_META_LENGTH = "Meta Description Length"
FACTOR_KEYWORD_IN_META = "Keyword in Meta Description"
FACTOR_H1_PRESENCE = "H1 Tag Presence"
FACTOR_KEYWORD_IN_H1 = "Keyword in H1"
FACTOR_HEADER_HIERARCHY = "Header Hierarchy"
FACTOR_CONTENT_LENGTH = "Content Length"
FACTOR_KEYWORD_EARLY = "Keyword in First ~100 Words"
FACTOR_KEYWORD_DENSITY = "Keyword Density"
FACTOR_IMAGE_ALT = "Image Alt Text"
FACTOR_IMAGE_ALT_PRESENCE = "Image Alt Text Presence"
FACTOR_KEYWORD_IN_ALT = "Keyword in Alt Text"
FACTOR_LINKS_PRESENCE = "Links Presence"
FACTOR_EXTERNAL_LINKS = "External Links"


# =============================================================================
# Document Constants
# =============================================================================

# Token the markup must begin with (compared case-insensitively)
DOCTYPE_TOKEN = "<!doctype html>"

# Selector matching every heading level, in document order
HEADER_SELECTOR = "h1, h2, h3, h4, h5, h6"

# Placeholder used when an image has no src attribute
UNKNOWN_IMAGE_SOURCE = "[unknown source]"

# Prefixes that mark an href as absolute (likely external)
ABSOLUTE_LINK_PREFIXES = ("http://", "https://")

# Punctuation stripped (once) from the end of a word before density matching
TRAILING_PUNCTUATION = ".,!?;:"


# =============================================================================
# Suggestion Constants
# =============================================================================

# Placeholders returned to HTTP callers for slots that could not be generated
TITLE_SUGGESTION_PLACEHOLDER = "Error generating title suggestion."
META_SUGGESTION_PLACEHOLDER = "Error generating meta description suggestion."

# System prompt sent with every text-generation request
SYSTEM_PROMPT = "You are an expert SEO copywriter."

# Provider error fragments that should not be retried
NON_RETRYABLE_ERRORS = (
    "invalid api key",
    "authentication",
    "unauthorized",
    "invalid_api_key",
    "model not found",
    "invalid model",
)

# Initial backoff delay in seconds between provider retries
INITIAL_BACKOFF_DELAY_SECONDS = 2.0

# Multiplier applied to the backoff delay after each retry
EXPONENTIAL_BACKOFF_BASE = 2


# =============================================================================
# HTTP Constants
# =============================================================================

# Default request body limit (bytes)
DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024

DEFAULT_PORT = 3000


# =============================================================================
# Logging Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "uvicorn.access")
