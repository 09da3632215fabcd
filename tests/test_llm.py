"""Tests for LLM client."""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
from seo_grader.config import Config
from seo_grader.exceptions import ProviderUnavailable
from seo_grader.llm import (
    LLMClient,
    anthropic_text_block,
    anthropic_tool_use,
    build_llm_client,
    extract_text,
    openai_function_call,
    openai_message_text,
)


def openai_response(content=None, tool_calls=None, function_call=None):
    """Build a chat completion shaped object."""
    message = SimpleNamespace(content=content, tool_calls=tool_calls, function_call=function_call)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def anthropic_response(*blocks):
    """Build a message shaped object from content blocks."""
    return SimpleNamespace(content=list(blocks))


def sdk_client():
    """A provider SDK client usable as an async context manager."""
    client = MagicMock()
    client.__aenter__.return_value = client
    return client


class TestLLMClient:
    """Test cases for LLMClient."""

    def test_llm_initialization_with_key(self):
        """Test LLM client initialization with API key."""
        client = LLMClient(api_key="test-key")
        assert client.api_key == "test-key"
        assert client.model == "gpt-4o-mini"
        assert client.provider == "openai"
        assert client.max_tokens == 512
        assert client.max_retries == 2

    def test_llm_initialization_without_key(self):
        """Test LLM client initialization without API key raises error."""
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ProviderUnavailable, match="API key must be provided"):
                LLMClient()

    def test_llm_initialization_from_env(self):
        """Test LLM client initialization from environment variable."""
        with patch.dict("os.environ", {"LLM_API_KEY": "env-key"}):
            client = LLMClient()
            assert client.api_key == "env-key"

    def test_unsupported_provider(self):
        """Test an unknown provider is rejected."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            LLMClient(api_key="test-key", provider="carrier-pigeon")

    @pytest.mark.asyncio
    @patch("openai.AsyncOpenAI")
    async def test_call_openai(self, mock_openai_class):
        """Test calling OpenAI API."""
        mock_client = sdk_client()
        mock_client.chat.completions.create = AsyncMock(
            return_value=openai_response(content="  Best Coffee Guide  ")
        )
        mock_openai_class.return_value = mock_client

        client = LLMClient(api_key="test-key", provider="openai")
        text = await client.generate("Test prompt")

        assert text == "Best Coffee Guide"
        mock_openai_class.assert_called_once_with(api_key="test-key", timeout=30.0)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 512
        assert kwargs["messages"][-1] == {"role": "user", "content": "Test prompt"}
        mock_client.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("anthropic.AsyncAnthropic")
    async def test_call_anthropic(self, mock_anthropic_class):
        """Test calling Anthropic API."""
        mock_client = sdk_client()
        mock_client.messages.create = AsyncMock(
            return_value=anthropic_response(SimpleNamespace(type="text", text="Coffee, Brewed Right"))
        )
        mock_anthropic_class.return_value = mock_client

        client = LLMClient(api_key="test-key", model="claude-test", provider="anthropic")
        text = await client.generate("Test prompt")

        assert text == "Coffee, Brewed Right"
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["messages"] == [{"role": "user", "content": "Test prompt"}]
        assert "system" in kwargs
        mock_client.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unrecognized_response_returns_none(self):
        """Test a response with no usable text yields None."""
        client = LLMClient(api_key="test-key")
        with patch.object(client, "_call_openai", AsyncMock(return_value=SimpleNamespace(choices=[]))):
            assert await client.generate("Test prompt") is None

    @pytest.mark.asyncio
    async def test_transient_error_is_retried(self):
        """Test that a transient failure is retried and then succeeds."""
        client = LLMClient(api_key="test-key", retry_delay=0)
        call = AsyncMock(side_effect=[ConnectionError("connection reset"), openai_response(content="ok")])

        with patch.object(client, "_call_openai", call):
            assert await client.generate("Test prompt") == "ok"

        assert call.await_count == 2

    @pytest.mark.asyncio
    async def test_retries_exhausted(self):
        """Test that the last error propagates after all attempts."""
        client = LLMClient(api_key="test-key", max_retries=1, retry_delay=0)
        call = AsyncMock(side_effect=TimeoutError("request timed out"))

        with patch.object(client, "_call_openai", call):
            with pytest.raises(TimeoutError):
                await client.generate("Test prompt")

        assert call.await_count == 2

    @pytest.mark.asyncio
    async def test_non_retryable_error_raises_immediately(self):
        """Test that authentication errors are not retried."""
        client = LLMClient(api_key="test-key", retry_delay=0)
        call = AsyncMock(side_effect=RuntimeError("Invalid API key provided"))

        with patch.object(client, "_call_openai", call):
            with pytest.raises(RuntimeError, match="Invalid API key"):
                await client.generate("Test prompt")

        assert call.await_count == 1


class TestExtractionStrategies:
    """Test cases for response text extraction."""

    def test_openai_message_text(self):
        """Test the plain message content shape."""
        assert openai_message_text(openai_response(content="Title")) == "Title"
        assert openai_message_text(openai_response(content="   ")) is None
        assert openai_message_text(SimpleNamespace()) is None

    def test_openai_tool_call_arguments(self):
        """Test JSON arguments of a tool call."""
        tool_call = SimpleNamespace(function=SimpleNamespace(arguments='{"title": "Coffee 101"}'))
        assert openai_function_call(openai_response(tool_calls=[tool_call])) == "Coffee 101"

    def test_openai_legacy_function_call(self):
        """Test the legacy function_call shape with plain-text arguments."""
        function_call = SimpleNamespace(arguments="Coffee 101")
        assert openai_function_call(openai_response(function_call=function_call)) == "Coffee 101"

    def test_anthropic_text_block_skips_other_blocks(self):
        """Test the first text block is used."""
        response = anthropic_response(
            SimpleNamespace(type="thinking", thinking="..."),
            SimpleNamespace(type="text", text="Coffee 101"),
        )
        assert anthropic_text_block(response) == "Coffee 101"

    def test_anthropic_tool_use(self):
        """Test tool_use input objects."""
        response = anthropic_response(
            SimpleNamespace(type="tool_use", input={"meta_description": "All about coffee."})
        )
        assert anthropic_tool_use(response) == "All about coffee."
        assert anthropic_text_block(response) is None

    def test_extract_text_tries_strategies_in_order(self):
        """Test fallback to the second strategy."""
        tool_call = SimpleNamespace(function=SimpleNamespace(arguments={"text": "From tool"}))
        response = openai_response(content=None, tool_calls=[tool_call])

        assert extract_text(response, (openai_message_text, openai_function_call)) == "From tool"

    def test_extract_text_no_match(self):
        """Test that an unknown shape yields None."""
        assert extract_text({"unexpected": True}, (openai_message_text, anthropic_text_block)) is None


class TestBuildLLMClient:
    """Test cases for build_llm_client."""

    def test_without_key_returns_none(self):
        """Test that a missing key disables the client."""
        assert build_llm_client(Config(llm_api_key=None)) is None

    def test_with_key(self):
        """Test that configuration is passed through."""
        client = build_llm_client(
            Config(llm_api_key="k", llm_provider="anthropic", llm_model="claude-test", llm_max_retries=0)
        )
        assert isinstance(client, LLMClient)
        assert client.provider == "anthropic"
        assert client.model == "claude-test"
        assert client.max_retries == 0
