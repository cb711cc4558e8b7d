"""Anthropic Claude LLM provider implementation.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from collections.abc import Sequence
from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..errors import (
    ProviderError,
    ProviderNetworkError,
    ProviderResponseError,
    ProviderTimeoutError,
    error_for_status,
)
from ..models import LLMResponse, Turn, TurnRole


def translate_anthropic_error(exc: anthropic.AnthropicError, provider: str) -> ProviderError:
    """Translate an Anthropic SDK exception into a ProviderError."""
    if isinstance(exc, anthropic.APITimeoutError):
        return ProviderTimeoutError(str(exc), provider=provider)
    if isinstance(exc, anthropic.APIConnectionError):
        return ProviderNetworkError(str(exc), provider=provider)
    if isinstance(exc, anthropic.APIStatusError):
        return error_for_status(exc.status_code, exc.message, provider=provider)
    return ProviderResponseError(str(exc), provider=provider)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system turn moves to the 'system' parameter)
    - SDK exception translation
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use (default: claude-sonnet-4-20250514)
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def name(self) -> str:
        return "anthropic"

    async def chat_completion(
        self,
        messages: Sequence[Turn],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Anthropic Claude.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (default: 4096)
            **kwargs: Additional Anthropic-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            ProviderError: On any API failure
        """
        system_message = None
        anthropic_messages = []

        for turn in messages:
            if turn.role == TurnRole.SYSTEM:
                system_message = turn.content
            else:
                anthropic_messages.append(turn.to_wire())

        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": anthropic_messages,
            "temperature": temperature,
            "max_tokens": max_tokens or 4096,  # Anthropic requires max_tokens
            **kwargs
        }

        if system_message:
            request_params["system"] = system_message

        try:
            response = await self._client.messages.create(**request_params)
        except anthropic.AnthropicError as e:
            raise translate_anthropic_error(e, self.name) from e

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            }

        # Concatenate text blocks; tool or thinking blocks carry no text
        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
