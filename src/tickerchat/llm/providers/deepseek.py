from collections.abc import Sequence
from typing import Any

import openai
from openai import AsyncOpenAI

from ..base import LLMProvider
from ..errors import ProviderResponseError
from ..models import LLMResponse, Turn
from .openai import translate_openai_error


class DeepSeekProvider(LLMProvider):
    """DeepSeek LLM provider implementation using OpenAI-compatible API.

    Hidden design decisions:
    - DeepSeek API client initialization (via OpenAI SDK)
    - Turn to message conversion
    - SDK exception translation
    """

    def __init__(
        self,
        api_key: str,
        model: str = "deepseek-chat",
        base_url: str = "https://api.deepseek.com",
        **client_kwargs: Any
    ):
        """Initialize DeepSeek provider.

        Args:
            api_key: DeepSeek API key
            model: Default model to use ('deepseek-chat' or 'deepseek-reasoner')
            base_url: DeepSeek API base URL (default: https://api.deepseek.com)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
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
        return "deepseek"

    async def chat_completion(
        self,
        messages: Sequence[Turn],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using DeepSeek."""
        request_params: dict[str, Any] = {
            "model": model or self._model,
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
        """Close the DeepSeek client."""
        await self._client.close()
