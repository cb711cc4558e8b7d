"""Provider failure types.

Every provider translates its SDK's exceptions into one of these so that
callers can react to the failure category without importing vendor SDKs.
"""


class ProviderError(Exception):
    """Base class for provider-call failures."""

    def __init__(self, message: str, provider: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code

    def is_retryable(self) -> bool:
        """Override in subclasses to control retry behavior."""
        return False


class ProviderAuthenticationError(ProviderError):
    """Credential missing, invalid or not permitted (non-retryable)."""


class ProviderQuotaError(ProviderError):
    """Account has no remaining credit (non-retryable)."""


class ProviderRateLimitError(ProviderError):
    """Too many requests (retryable)."""

    def is_retryable(self) -> bool:
        return True


class ProviderNetworkError(ProviderError):
    """Network or connection error (retryable)."""

    def is_retryable(self) -> bool:
        return True


class ProviderTimeoutError(ProviderNetworkError):
    """The provider did not answer in time (retryable)."""


class ProviderResponseError(ProviderError):
    """Any other error status or an unusable response (non-retryable)."""


def error_for_status(
    status_code: int | None,
    message: str,
    provider: str,
    code: str | None = None,
) -> ProviderError:
    """Map an HTTP status returned by a provider API to a ProviderError.

    Args:
        status_code: HTTP status of the failed request
        message: Error message reported by the SDK
        provider: Provider name for diagnostics
        code: Optional provider error code (e.g. 'insufficient_quota')

    Returns:
        The matching ProviderError subclass instance
    """
    if status_code in (401, 403):
        cls: type[ProviderError] = ProviderAuthenticationError
    elif status_code == 402 or code == "insufficient_quota":
        cls = ProviderQuotaError
    elif status_code == 429:
        cls = ProviderRateLimitError
    elif status_code == 408:
        cls = ProviderTimeoutError
    else:
        cls = ProviderResponseError
    return cls(message, provider=provider, status_code=status_code)
