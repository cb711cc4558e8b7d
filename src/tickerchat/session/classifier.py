"""Failure classification.

Turns a provider-call failure into the text shown in place of an answer.
The raw error never reaches the user; it is logged by the session instead.
"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..i18n import CatalogLocalizer, Localizer
from ..llm.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderNetworkError,
    ProviderQuotaError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)


class FailureKind(str, Enum):
    """Category of a failed dispatch."""

    AUTHENTICATION = "authentication"
    QUOTA = "quota"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class FailureClassification(BaseModel):
    """User-facing interpretation of a failure."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    fallback_text: str
    retryable: bool


class ErrorClassifier(ABC):
    """Maps provider failures to fallback text and a retryable flag."""

    @abstractmethod
    def classify(self, error: BaseException) -> FailureClassification:
        """Classify a failure raised by the provider client."""

    def fallback_text(self, error: BaseException) -> str:
        """Text to append to the transcript in place of an answer."""
        return self.classify(error).fallback_text


def failure_kind(error: BaseException) -> FailureKind:
    """Determine the category of an exception.

    Order matters: ProviderTimeoutError is a ProviderNetworkError.
    """
    if isinstance(error, ProviderTimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(error, ProviderNetworkError):
        return FailureKind.NETWORK
    if isinstance(error, ProviderRateLimitError):
        return FailureKind.RATE_LIMIT
    if isinstance(error, ProviderQuotaError):
        return FailureKind.QUOTA
    if isinstance(error, ProviderAuthenticationError):
        return FailureKind.AUTHENTICATION
    return FailureKind.UNKNOWN


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, ProviderError):
        return error.is_retryable()
    return False


class StaticErrorClassifier(ErrorClassifier):
    """Single apology for every failure.

    The kind and retryable flag are still reported so callers can log
    them, but the user always sees the same message.
    """

    def __init__(self, localizer: Localizer | None = None):
        self._localizer = localizer or CatalogLocalizer()

    def classify(self, error: BaseException) -> FailureClassification:
        return FailureClassification(
            kind=failure_kind(error),
            fallback_text=self._localizer.translate("chat.fallback"),
            retryable=_is_retryable(error),
        )


class ProviderErrorClassifier(ErrorClassifier):
    """Per-category guidance: credential problems and transient errors
    need different advice."""

    def __init__(self, localizer: Localizer | None = None):
        self._localizer = localizer or CatalogLocalizer()

    def classify(self, error: BaseException) -> FailureClassification:
        kind = failure_kind(error)
        key = "chat.fallback" if kind == FailureKind.UNKNOWN else f"chat.fallback.{kind.value}"
        return FailureClassification(
            kind=kind,
            fallback_text=self._localizer.translate(key),
            retryable=_is_retryable(error),
        )
