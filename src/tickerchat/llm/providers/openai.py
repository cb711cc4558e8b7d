from collections.abc import Sequence
from typing import Any

import openai
from openai import AsyncOpenAI

from ..base import LLMProvider
from ..errors import (
    ProviderError,
    ProviderNetworkError,
    ProviderResponseError,
    ProviderTimeoutError,
    error_for_status,
)
from ..models import LLMResponse, Turn


def translate_openai_error(exc: openai.OpenAIError, provider: str) -> ProviderError:
    """Translate an OpenAI SDK exception into a ProviderError.

    Shared by every provider that talks to an OpenAI-compatible API.
    """
    if isinstance(exc, openai.APITimeoutError):
        return ProviderTimeoutError(str(exc), provider=provider)
    if isinstance(exc, openai.APIConnectionError):
        return ProviderNetworkError(str(exc), provider=provider)
    if isinstance(exc, openai.APIStatusError):
        return error_for_status(
            exc.status_code,
            exc.message,
            provider=provider,
            code=getattr(exc, "code", None),
        )
    return ProviderResponseError(str(exc), provider=provider)


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    Hidden design decisions:
    - OpenAI API client initialization
    - Turn to Chat Completions message conversion
    - SDK exception translation
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def name(self) -> str:
        return "openai"

    async def chat_completion(
        self,
        messages: Sequence[Turn],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using OpenAI.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            ProviderError: On any API failure
        """
        model_to_use = model or self._model

        # Build request params, only including max_tokens if set
        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": [turn.to_wire() for turn in messages],
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except openai.OpenAIError as e:
            raise translate_openai_error(e, self.name) from e

        if not completion.choices:
            raise ProviderResponseError("Response contained no choices", provider=self.name)

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
