from .base import LLMProvider
from .errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderNetworkError,
    ProviderQuotaError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from .factory import SUPPORTED_PROVIDERS, create_llm_provider
from .models import LLMResponse, Turn, TurnRole
from .pricing import estimate_cost
from .providers import AnthropicProvider, DeepSeekProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "SUPPORTED_PROVIDERS",
    "LLMResponse",
    "Turn",
    "TurnRole",
    "estimate_cost",
    "ProviderError",
    "ProviderAuthenticationError",
    "ProviderNetworkError",
    "ProviderQuotaError",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ProviderTimeoutError",
    "AnthropicProvider",
    "DeepSeekProvider",
    "OpenAIProvider",
]
