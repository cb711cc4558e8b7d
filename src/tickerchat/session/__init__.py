"""Conversation session module.

Owns the two conversation logs, the availability gate, dispatch
orchestration and failure classification for one subject.
"""

from .classifier import (
    ErrorClassifier,
    FailureClassification,
    FailureKind,
    ProviderErrorClassifier,
    StaticErrorClassifier,
)
from .errors import ChatSessionError, ConfigurationUnavailableError
from .factory import create_session, create_session_from_settings
from .gate import availability, can_accept
from .history import Transcript, TurnHistory
from .models import (
    Availability,
    DispatchState,
    DisplayMessage,
    Sender,
    SessionSnapshot,
    SubmitOutcome,
)
from .orchestrator import ChatSession, SessionState

__all__ = [
    "Availability",
    "ChatSession",
    "ChatSessionError",
    "ConfigurationUnavailableError",
    "DispatchState",
    "DisplayMessage",
    "ErrorClassifier",
    "FailureClassification",
    "FailureKind",
    "ProviderErrorClassifier",
    "Sender",
    "SessionSnapshot",
    "SessionState",
    "StaticErrorClassifier",
    "SubmitOutcome",
    "Transcript",
    "TurnHistory",
    "availability",
    "can_accept",
    "create_session",
    "create_session_from_settings",
]
