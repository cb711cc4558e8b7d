"""Session error types.

Configuration and liveness problems are preconditions checked by the
availability gate, so the dispatch path never raises these. They exist
for hosts that refuse to start a session at all.
"""


class ChatSessionError(Exception):
    """Base class for session errors."""


class ConfigurationUnavailableError(ChatSessionError):
    """No usable provider credential is configured."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider} is not configured: {reason}")
        self.provider = provider
        self.reason = reason
