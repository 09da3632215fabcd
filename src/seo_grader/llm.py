"""LLM client for title and meta description suggestions."""

from typing import Any, Callable, Optional, Sequence
import asyncio
import json
import logging
import os

from seo_grader.config import Config
from seo_grader.constants import (
    EXPONENTIAL_BACKOFF_BASE,
    INITIAL_BACKOFF_DELAY_SECONDS,
    NON_RETRYABLE_ERRORS,
    SYSTEM_PROMPT,
)
from seo_grader.exceptions import ProviderUnavailable

logger = logging.getLogger(__name__)

ExtractionStrategy = Callable[[Any], Optional[str]]

# Keys checked, in order, when a function/tool call returns a JSON object
_ARGUMENT_KEYS = ("text", "suggestion", "title", "meta_description", "description")


def _first(items: Any) -> Any:
    """First element of a list/tuple, or None."""
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


def _clean(value: Any) -> Optional[str]:
    """Return stripped text, or None for non-strings and blank strings."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _text_from_arguments(arguments: Any) -> Optional[str]:
    """Pull suggestion text out of function/tool call arguments.

    Arguments may be a JSON string, a dict, or plain text.
    """
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except ValueError:
            return _clean(arguments)

    if isinstance(arguments, str):
        return _clean(arguments)
    if not isinstance(arguments, dict):
        return None

    for key in _ARGUMENT_KEYS:
        text = _clean(arguments.get(key))
        if text:
            return text
    for value in arguments.values():
        text = _clean(value)
        if text:
            return text
    return None


# =============================================================================
# Extraction strategies (each returns None on shape mismatch, never raises)
# =============================================================================


def openai_message_text(response: Any) -> Optional[str]:
    """choices[0].message.content"""
    choice = _first(getattr(response, "choices", None))
    message = getattr(choice, "message", None)
    return _clean(getattr(message, "content", None))


def openai_function_call(response: Any) -> Optional[str]:
    """choices[0].message.tool_calls[0].function.arguments, or the legacy
    choices[0].message.function_call.arguments."""
    choice = _first(getattr(response, "choices", None))
    message = getattr(choice, "message", None)

    tool_call = _first(getattr(message, "tool_calls", None))
    function = getattr(tool_call, "function", None) or getattr(message, "function_call", None)
    return _text_from_arguments(getattr(function, "arguments", None))


def anthropic_text_block(response: Any) -> Optional[str]:
    """First content block of type "text"."""
    blocks = getattr(response, "content", None)
    if not isinstance(blocks, (list, tuple)):
        return None
    for block in blocks:
        if getattr(block, "type", None) == "text":
            return _clean(getattr(block, "text", None))
    return None


def anthropic_tool_use(response: Any) -> Optional[str]:
    """Input of the first content block of type "tool_use"."""
    blocks = getattr(response, "content", None)
    if not isinstance(blocks, (list, tuple)):
        return None
    for block in blocks:
        if getattr(block, "type", None) == "tool_use":
            return _text_from_arguments(getattr(block, "input", None))
    return None


EXTRACTION_STRATEGIES: dict[str, tuple[ExtractionStrategy, ...]] = {
    "openai": (openai_message_text, openai_function_call),
    "anthropic": (anthropic_text_block, anthropic_tool_use),
}


def extract_text(response: Any, strategies: Sequence[ExtractionStrategy]) -> Optional[str]:
    """Run extraction strategies in order and return the first hit.

    Args:
        response: Raw provider response object
        strategies: Ordered extraction strategies

    Returns:
        Extracted text, or None if no strategy matched
    """
    for strategy in strategies:
        text = strategy(response)
        if text:
            return text
    logger.warning(f"Could not extract text from provider response: {response!r}")
    return None


class LLMClient:
    """Async client for a text-generation provider (OpenAI or Anthropic)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        provider: str = "openai",
        max_tokens: int = 512,
        timeout: float = 30.0,
        max_retries: int = 2,
        retry_delay: float = INITIAL_BACKOFF_DELAY_SECONDS,
    ):
        """Initialize the LLM client.

        Args:
            api_key: API key for the LLM provider
            model: Model name to use
            provider: LLM provider (openai, anthropic)
            max_tokens: Maximum tokens for each response
            timeout: Per-request timeout in seconds
            max_retries: Retries for transient failures
            retry_delay: Initial delay between retries in seconds

        Raises:
            ProviderUnavailable: If no API key is configured
            ValueError: If the provider is not supported
        """
        self.api_key = api_key or os.getenv("LLM_API_KEY")
        self.model = model
        self.provider = provider
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        if not self.api_key:
            raise ProviderUnavailable(
                "API key must be provided or set in LLM_API_KEY environment variable"
            )
        if provider not in EXTRACTION_STRATEGIES:
            raise ValueError(f"Unsupported provider: {provider}")

        self.strategies = EXTRACTION_STRATEGIES[provider]

    async def generate(self, prompt: str) -> Optional[str]:
        """Generate text for a prompt.

        Args:
            prompt: The prompt to send

        Returns:
            Extracted response text, or None if the response had no
            recognizable shape

        Raises:
            Exception: If the provider call fails after all retries
        """
        response = await self._call_llm(prompt)
        return extract_text(response, self.strategies)

    async def _call_llm(self, prompt: str) -> Any:
        """Call the provider with retry logic.

        Implements exponential backoff for transient failures (connection errors,
        rate limits, timeouts). Non-retryable errors (auth, invalid model) are
        raised immediately.
        """
        last_exception = None
        current_delay = self.retry_delay

        for attempt in range(self.max_retries + 1):
            try:
                if self.provider == "openai":
                    return await self._call_openai(prompt)
                return await self._call_anthropic(prompt)

            except Exception as e:
                error_str = str(e).lower()
                last_exception = e

                if any(err in error_str for err in NON_RETRYABLE_ERRORS):
                    logger.error(f"Non-retryable LLM error: {e}")
                    raise

                if attempt < self.max_retries:
                    logger.warning(
                        f"LLM call failed (attempt {attempt + 1}/{self.max_retries + 1}): {e}. "
                        f"Retrying in {current_delay:.1f}s..."
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= EXPONENTIAL_BACKOFF_BASE
                else:
                    logger.error(
                        f"LLM call failed after {self.max_retries + 1} attempts: {e}"
                    )

        raise last_exception

    async def _call_openai(self, prompt: str) -> Any:
        """Call OpenAI API.

        Args:
            prompt: The prompt to send

        Returns:
            Raw chat completion response
        """
        try:
            import openai
        except ImportError:
            raise ImportError(
                "openai package not installed. Install with: pip install openai"
            )

        async with openai.AsyncOpenAI(api_key=self.api_key, timeout=self.timeout) as client:
            return await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.7,
                max_tokens=self.max_tokens,
            )

    async def _call_anthropic(self, prompt: str) -> Any:
        """Call Anthropic API.

        Args:
            prompt: The prompt to send

        Returns:
            Raw message response
        """
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic package not installed. Install with: pip install anthropic"
            )

        async with anthropic.AsyncAnthropic(api_key=self.api_key, timeout=self.timeout) as client:
            return await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )


def build_llm_client(config: Optional[Config] = None) -> Optional[LLMClient]:
    """Build a client from configuration, or None when no key is configured."""
    config = config or Config.from_env()
    if not config.llm_api_key:
        logger.warning("LLM_API_KEY not set. Optimization features will be disabled.")
        return None

    return LLMClient(
        api_key=config.llm_api_key,
        model=config.llm_model,
        provider=config.llm_provider,
        max_tokens=config.llm_max_tokens,
        timeout=config.llm_timeout,
        max_retries=config.llm_max_retries,
    )
