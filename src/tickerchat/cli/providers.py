"""Collaborator factories for the CLI.

Centralizes creation of settings, notifier and localizer from environment
variables. Hides configuration details from command implementations.
"""

import asyncio
import logging
import time

from pydantic import BaseModel, ConfigDict
from rich.console import Console

from ..config import KEY_ENV_VARS, KEY_PREFIXES, CredentialStatus, ProviderSettings
from ..i18n import CatalogLocalizer, Localizer
from ..llm import LLMProvider, Turn, TurnRole
from ..notify import Notifier
from ..session.classifier import FailureKind, failure_kind
from ..session.errors import ConfigurationUnavailableError

logger = logging.getLogger(__name__)

# Default console for output
_console = Console()

CHECK_MESSAGE = 'Reply only "OK" if you receive this message.'


class ConsoleNotifier(Notifier):
    """Prints toast-style notices to a Rich console."""

    def __init__(self, console: Console | None = None):
        self._console = console or _console

    def notify_success(self, message: str) -> None:
        self._console.print(f"[green]✓ {message}[/green]")

    def notify_failure(self, message: str) -> None:
        self._console.print(f"[red]✗ {message}[/red]")


def get_settings() -> ProviderSettings:
    """Create provider settings from environment variables.

    Environment variables:
        LLM_PROVIDER: Provider type (openai, deepseek, anthropic; default: openai)
        OPENAI_API_KEY / DEEPSEEK_API_KEY / ANTHROPIC_API_KEY: credential
        OPENAI_CHAT_MODEL / DEEPSEEK_MODEL / ANTHROPIC_MODEL: model override
        TICKERCHAT_TEMPERATURE, TICKERCHAT_MAX_TOKENS,
        TICKERCHAT_RESPONSE_TIMEOUT, TICKERCHAT_LOG_LEVEL
    """
    return ProviderSettings.from_env()


def get_localizer(language: str) -> Localizer:
    """Create the display string localizer for a language code."""
    return CatalogLocalizer(language)


def require_credential(settings: ProviderSettings) -> None:
    """Refuse to continue without a usable credential.

    Raises:
        ConfigurationUnavailableError: If the key is missing or malformed
    """
    status = settings.credential_status
    if status == CredentialStatus.MISSING:
        raise ConfigurationUnavailableError(
            settings.provider, f"{KEY_ENV_VARS[settings.provider]} not set in environment"
        )
    if status == CredentialStatus.MALFORMED:
        raise ConfigurationUnavailableError(
            settings.provider,
            f"{KEY_ENV_VARS[settings.provider]} must start with '{KEY_PREFIXES[settings.provider]}'",
        )


class ConnectionCheck(BaseModel):
    """Outcome of a one-turn request sent to verify the provider."""

    model_config = ConfigDict(frozen=True)

    success: bool
    latency_ms: int
    model: str
    error_kind: FailureKind | None = None
    error: str | None = None


async def check_connection(
    provider: LLMProvider,
    model: str,
    timeout: float | None = 30.0,
) -> ConnectionCheck:
    """Send a minimal request and time it.

    Failures are classified rather than raised, so the caller can report
    them alongside the configuration.
    """
    messages = [Turn(role=TurnRole.USER, content=CHECK_MESSAGE)]
    start = time.perf_counter()
    try:
        response = await asyncio.wait_for(
            provider.chat_completion(messages, model=model, temperature=0.0, max_tokens=5),
            timeout,
        )
    except asyncio.TimeoutError:
        elapsed = int((time.perf_counter() - start) * 1000)
        logger.warning("Connection check to %s timed out after %dms", provider.name, elapsed)
        return ConnectionCheck(
            success=False,
            latency_ms=elapsed,
            model=model,
            error_kind=FailureKind.TIMEOUT,
            error=f"No response within {timeout}s",
        )
    except Exception as e:
        elapsed = int((time.perf_counter() - start) * 1000)
        logger.warning("Connection check to %s failed: %s", provider.name, e)
        return ConnectionCheck(
            success=False,
            latency_ms=elapsed,
            model=model,
            error_kind=failure_kind(e),
            error=str(e),
        )

    elapsed = int((time.perf_counter() - start) * 1000)
    logger.info("Connection check to %s succeeded in %dms", provider.name, elapsed)
    return ConnectionCheck(success=True, latency_ms=elapsed, model=response.model)
