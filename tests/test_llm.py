"""Unit tests for the llm module.

SDK clients are replaced with AsyncMock so no network access is needed.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import anthropic
import httpx
import openai
import pytest

from tickerchat.llm import (
    AnthropicProvider,
    DeepSeekProvider,
    LLMProvider,
    OpenAIProvider,
    ProviderAuthenticationError,
    ProviderNetworkError,
    ProviderQuotaError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
    Turn,
    TurnRole,
    create_llm_provider,
    estimate_cost,
)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"

HISTORY = [
    Turn(role=TurnRole.SYSTEM, content="You analyze AAPL."),
    Turn(role=TurnRole.USER, content="AAPL outlook?"),
]


def status_response(url: str, status: int) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("POST", url))


def openai_completion(content: str | None = "Bullish.") -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        model="gpt-4o-mini",
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=2, total_tokens=14),
    )


class TestLLMProviderInterface:

    def test_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestFactory:
    """Tests for create_llm_provider."""

    @pytest.mark.parametrize("name,cls", [
        ("openai", OpenAIProvider),
        ("deepseek", DeepSeekProvider),
        ("anthropic", AnthropicProvider),
        ("claude", AnthropicProvider),
        ("OpenAI", OpenAIProvider),
    ])
    def test_creates_provider(self, name, cls):
        provider = create_llm_provider(name, api_key="sk-test")
        assert isinstance(provider, cls)

    def test_missing_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("openai")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("gemini", api_key="x")

    def test_default_models(self):
        assert create_llm_provider("openai", api_key="sk-test").model == "gpt-4o-mini"
        assert create_llm_provider("deepseek", api_key="sk-test").model == "deepseek-chat"


class TestOpenAIProvider:
    """Tests for OpenAIProvider request building and error translation."""

    @pytest.mark.asyncio
    async def test_chat_completion(self, monkeypatch):
        provider = OpenAIProvider(api_key="sk-test")
        create = AsyncMock(return_value=openai_completion())
        monkeypatch.setattr(provider._client.chat.completions, "create", create)

        response = await provider.chat_completion(HISTORY, temperature=0.7, max_tokens=1000)

        assert response.content == "Bullish."
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 2, "total_tokens": 14}
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 1000
        assert kwargs["messages"] == [
            {"role": "system", "content": "You analyze AAPL."},
            {"role": "user", "content": "AAPL outlook?"},
        ]

    @pytest.mark.asyncio
    async def test_max_tokens_omitted_when_none(self, monkeypatch):
        provider = OpenAIProvider(api_key="sk-test")
        create = AsyncMock(return_value=openai_completion())
        monkeypatch.setattr(provider._client.chat.completions, "create", create)

        await provider.chat_completion(HISTORY)

        assert "max_tokens" not in create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_no_choices_is_response_error(self, monkeypatch):
        provider = OpenAIProvider(api_key="sk-test")
        empty = SimpleNamespace(choices=[], model="gpt-4o-mini", usage=None)
        monkeypatch.setattr(provider._client.chat.completions, "create", AsyncMock(return_value=empty))

        with pytest.raises(ProviderResponseError):
            await provider.chat_completion(HISTORY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,expected", [
        (
            openai.AuthenticationError("bad key", response=status_response(OPENAI_URL, 401), body=None),
            ProviderAuthenticationError,
        ),
        (
            openai.RateLimitError("slow down", response=status_response(OPENAI_URL, 429), body=None),
            ProviderRateLimitError,
        ),
        (
            openai.RateLimitError(
                "quota",
                response=status_response(OPENAI_URL, 429),
                body={"code": "insufficient_quota"},
            ),
            ProviderQuotaError,
        ),
        (
            openai.APIStatusError("payment", response=status_response(OPENAI_URL, 402), body=None),
            ProviderQuotaError,
        ),
        (
            openai.InternalServerError("oops", response=status_response(OPENAI_URL, 500), body=None),
            ProviderResponseError,
        ),
        (
            openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL)),
            ProviderTimeoutError,
        ),
        (
            openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)),
            ProviderNetworkError,
        ),
    ])
    async def test_error_translation(self, monkeypatch, error, expected):
        provider = OpenAIProvider(api_key="sk-test")
        monkeypatch.setattr(provider._client.chat.completions, "create", AsyncMock(side_effect=error))

        with pytest.raises(expected) as exc_info:
            await provider.chat_completion(HISTORY)

        assert exc_info.value.provider == "openai"
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one round-trip against the real API."""
        if not api_keys["openai"]:
            pytest.skip("OPENAI_API_KEY not set")

        async with OpenAIProvider(api_key=api_keys["openai"]) as provider:
            response = await provider.chat_completion(HISTORY, max_tokens=20)

        assert response.content


class TestDeepSeekProvider:

    @pytest.mark.asyncio
    async def test_errors_tagged_with_provider(self, monkeypatch):
        provider = DeepSeekProvider(api_key="sk-test")
        error = openai.RateLimitError("slow down", response=status_response(OPENAI_URL, 429), body=None)
        monkeypatch.setattr(provider._client.chat.completions, "create", AsyncMock(side_effect=error))

        with pytest.raises(ProviderRateLimitError) as exc_info:
            await provider.chat_completion(HISTORY)

        assert exc_info.value.provider == "deepseek"


class TestAnthropicProvider:
    """Tests for AnthropicProvider."""

    @pytest.mark.asyncio
    async def test_system_turn_moves_to_parameter(self, monkeypatch):
        provider = AnthropicProvider(api_key="sk-ant-test")
        message = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Bull"), SimpleNamespace(type="text", text="ish.")],
            model="claude-sonnet-4-20250514",
            usage=SimpleNamespace(input_tokens=10, output_tokens=3),
        )
        create = AsyncMock(return_value=message)
        monkeypatch.setattr(provider._client.messages, "create", create)

        response = await provider.chat_completion(HISTORY)

        assert response.content == "Bullish."
        assert response.usage["total_tokens"] == 13
        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "You analyze AAPL."
        assert kwargs["messages"] == [{"role": "user", "content": "AAPL outlook?"}]
        assert kwargs["max_tokens"] == 4096

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,expected", [
        (
            anthropic.AuthenticationError("bad key", response=status_response(ANTHROPIC_URL, 401), body=None),
            ProviderAuthenticationError,
        ),
        (
            anthropic.RateLimitError("slow down", response=status_response(ANTHROPIC_URL, 429), body=None),
            ProviderRateLimitError,
        ),
        (
            anthropic.APIConnectionError(request=httpx.Request("POST", ANTHROPIC_URL)),
            ProviderNetworkError,
        ),
    ])
    async def test_error_translation(self, monkeypatch, error, expected):
        provider = AnthropicProvider(api_key="sk-ant-test")
        monkeypatch.setattr(provider._client.messages, "create", AsyncMock(side_effect=error))

        with pytest.raises(expected):
            await provider.chat_completion(HISTORY)


class TestProviderErrors:

    def test_retryable_flags(self):
        assert ProviderRateLimitError("x").is_retryable()
        assert ProviderNetworkError("x").is_retryable()
        assert ProviderTimeoutError("x").is_retryable()
        assert not ProviderAuthenticationError("x").is_retryable()
        assert not ProviderQuotaError("x").is_retryable()
        assert not ProviderResponseError("x").is_retryable()


class TestEstimateCost:

    def test_uses_reported_token_split(self):
        usage = {"prompt_tokens": 1000, "completion_tokens": 1000, "total_tokens": 2000}
        assert estimate_cost(usage, "gpt-4o") == 0.02

    def test_total_only_splits_seventy_thirty(self):
        assert estimate_cost({"total_tokens": 1000}, "gpt-3.5-turbo") == 0.00165

    def test_dated_snapshot_priced_as_base_model(self):
        usage = {"prompt_tokens": 1000, "completion_tokens": 0}
        assert estimate_cost(usage, "gpt-4o-mini-2024-07-18") == 0.00015
        assert estimate_cost(usage, "gpt-4o-2024-08-06") == 0.005

    def test_unknown_model_or_usage(self):
        assert estimate_cost({"total_tokens": 10}, "claude-3-5-sonnet-20241022") is None
        assert estimate_cost(None, "gpt-4o") is None
