"""Provider configuration.

Hides where credentials and request parameters come from. Settings are
read from environment variables (a ``.env`` file is loaded by the CLI);
the session only ever asks the configuration service one question:
is a usable credential present?
"""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .llm import SUPPORTED_PROVIDERS, LLMProvider, create_llm_provider
from .llm.factory import normalize_provider_name

logger = logging.getLogger(__name__)

KEY_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

MODEL_ENV_VARS = {
    "openai": "OPENAI_CHAT_MODEL",
    "deepseek": "DEEPSEEK_MODEL",
    "anthropic": "ANTHROPIC_MODEL",
}

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "deepseek": "deepseek-chat",
    "anthropic": "claude-sonnet-4-20250514",
}

# Expected credential prefixes; anything else is reported as malformed
KEY_PREFIXES = {
    "openai": "sk-",
    "deepseek": "sk-",
    "anthropic": "sk-ant-",
}

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


class CredentialStatus(str, Enum):
    """State of the provider credential."""

    MISSING = "missing"
    MALFORMED = "malformed"
    PRESENT = "present"


class ProviderSettings(BaseModel):
    """Provider selection, credential and request parameters."""

    provider: str = Field(default="openai", description="Provider name")
    api_key: str | None = Field(default=None, description="Credential for the selected provider")
    model: str = Field(default=DEFAULT_MODELS["openai"], description="Model identifier sent on every call")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    response_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the provider; None waits indefinitely"
    )
    log_level: str = Field(default="WARNING")

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        name = normalize_provider_name(value)
        if name not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported provider: {value}. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return name

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderSettings":
        """Build settings from environment variables.

        Environment variables:
            LLM_PROVIDER: openai, deepseek or anthropic/claude (default: openai)
            OPENAI_API_KEY / DEEPSEEK_API_KEY / ANTHROPIC_API_KEY: credential
            OPENAI_CHAT_MODEL / DEEPSEEK_MODEL / ANTHROPIC_MODEL: model override
            TICKERCHAT_TEMPERATURE: sampling temperature (default: 0.7)
            TICKERCHAT_MAX_TOKENS: response token cap (default: 1000)
            TICKERCHAT_RESPONSE_TIMEOUT: seconds before a call is failed (default: none)
            TICKERCHAT_LOG_LEVEL: logging level (default: WARNING)
        """
        env = os.environ if environ is None else environ
        provider = normalize_provider_name(env.get("LLM_PROVIDER", "openai"))

        timeout = env.get("TICKERCHAT_RESPONSE_TIMEOUT")
        max_tokens = env.get("TICKERCHAT_MAX_TOKENS")

        return cls(
            provider=provider,
            api_key=env.get(KEY_ENV_VARS.get(provider, ""), None) or None,
            model=env.get(MODEL_ENV_VARS.get(provider, ""), None) or DEFAULT_MODELS.get(provider, ""),
            temperature=float(env.get("TICKERCHAT_TEMPERATURE", DEFAULT_TEMPERATURE)),
            max_tokens=int(max_tokens) if max_tokens else DEFAULT_MAX_TOKENS,
            response_timeout=float(timeout) if timeout else None,
            log_level=env.get("TICKERCHAT_LOG_LEVEL", "WARNING"),
        )

    @property
    def credential_status(self) -> CredentialStatus:
        """Classify the credential without contacting the provider."""
        if not self.api_key:
            return CredentialStatus.MISSING
        if not self.api_key.startswith(KEY_PREFIXES[self.provider]):
            return CredentialStatus.MALFORMED
        return CredentialStatus.PRESENT

    @property
    def masked_key(self) -> str | None:
        """Credential prefix safe to show in logs and status output."""
        if not self.api_key:
            return None
        return self.api_key[:10] + "..."


class ConfigService(ABC):
    """Answers whether a model-provider credential is available."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when the provider can be called."""


class EnvironmentConfigService(ConfigService):
    """Configuration service backed by ProviderSettings."""

    def __init__(self, settings: ProviderSettings):
        self._settings = settings

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    def is_configured(self) -> bool:
        status = self._settings.credential_status
        if status == CredentialStatus.MALFORMED:
            logger.warning(
                "%s credential does not start with %r",
                self._settings.provider,
                KEY_PREFIXES[self._settings.provider],
            )
        return status == CredentialStatus.PRESENT


class StaticConfigService(ConfigService):
    """Configuration service with a fixed, host-controlled answer."""

    def __init__(self, configured: bool = True):
        self.configured = configured

    def is_configured(self) -> bool:
        return self.configured


def create_provider(settings: ProviderSettings) -> LLMProvider:
    """Create the provider client described by settings.

    Raises:
        TypeError: If the credential is missing
    """
    if not settings.api_key:
        raise TypeError(f"{KEY_ENV_VARS[settings.provider]} is not set")
    return create_llm_provider(settings.provider, api_key=settings.api_key, model=settings.model)
