"""
tickerchat: an embedded conversational assistant session manager.

Keeps the model context window and the user-visible transcript of one
conversation in step, guarding dispatch behind configuration, liveness
and a single in-flight request.
"""

__version__ = "0.1.0"

from .config import EnvironmentConfigService, ProviderSettings, StaticConfigService
from .session import (
    Availability,
    ChatSession,
    DisplayMessage,
    SessionSnapshot,
    SubmitOutcome,
    create_session,
    create_session_from_settings,
)

__all__ = [
    "Availability",
    "ChatSession",
    "DisplayMessage",
    "EnvironmentConfigService",
    "ProviderSettings",
    "SessionSnapshot",
    "StaticConfigService",
    "SubmitOutcome",
    "create_session",
    "create_session_from_settings",
]
