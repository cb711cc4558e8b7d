"""Factories for chat sessions."""

import logging

from ..config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODELS,
    DEFAULT_TEMPERATURE,
    ConfigService,
    CredentialStatus,
    EnvironmentConfigService,
    ProviderSettings,
    create_provider,
)
from ..i18n import CatalogLocalizer, Localizer
from ..llm.base import LLMProvider
from ..notify import Notifier, NullNotifier
from ..prompts import get_system_prompt
from .classifier import ErrorClassifier, StaticErrorClassifier
from .history import Transcript, TurnHistory
from .orchestrator import ChatSession, SessionState

logger = logging.getLogger(__name__)


def create_session(
    subject: str,
    provider: LLMProvider | None,
    config: ConfigService,
    *,
    live: bool = True,
    model: str = DEFAULT_MODELS["openai"],
    localizer: Localizer | None = None,
    notifier: Notifier | None = None,
    classifier: ErrorClassifier | None = None,
    system_prompt: str | None = None,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int | None = DEFAULT_MAX_TOKENS,
    response_timeout: float | None = None,
) -> ChatSession:
    """Create a session about one subject.

    The subject is baked into the seeded system turn and the greeting, so
    a change of subject means discarding the session and creating a new one.

    Args:
        subject: What the conversation is about (e.g. a ticker symbol)
        provider: Provider client; None leaves the session unconfigured
        config: Answers whether a credential is present
        live: Initial liveness flag
        model: Model identifier sent with every request
        localizer: Display string lookup (default: English catalog)
        notifier: Success/failure notices (default: discard)
        classifier: Failure to fallback text mapping (default: single apology)
        system_prompt: Overrides the rendered system prompt template
        temperature: Sampling temperature for every request
        max_tokens: Response token cap for every request
        response_timeout: Seconds before a call takes the failure path; None waits

    Returns:
        A ChatSession in IDLE state with one system turn and one greeting
    """
    localizer = localizer or CatalogLocalizer()
    subject = subject.strip()

    state = SessionState(
        subject=subject,
        history=TurnHistory(system_prompt or get_system_prompt(subject)),
        transcript=Transcript(localizer.translate("chat.greeting", subject=subject)),
        live=live,
    )

    session = ChatSession(
        state=state,
        provider=provider,
        config=config,
        localizer=localizer,
        notifier=notifier or NullNotifier(),
        classifier=classifier or StaticErrorClassifier(localizer),
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        response_timeout=response_timeout,
    )
    logger.debug("Created session for %s (model=%s, configured=%s)", subject, model, state.configured)
    return session


def create_session_from_settings(
    subject: str,
    settings: ProviderSettings,
    **kwargs,
) -> ChatSession:
    """Create a session whose provider and parameters come from settings.

    A missing or malformed credential still yields a session; it simply
    reports UNCONFIGURED and rejects input.
    """
    provider = None
    if settings.credential_status == CredentialStatus.PRESENT:
        provider = create_provider(settings)

    return create_session(
        subject,
        provider,
        EnvironmentConfigService(settings),
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        response_timeout=settings.response_timeout,
        **kwargs,
    )
