"""Data models for a chat session.

These models define what the rendering layer sees. The mutable state
behind them is owned by ChatSession and never handed out directly.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import Turn


class Sender(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    BOT = "bot"


class DisplayMessage(BaseModel):
    """One user-visible chat bubble."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="Unique, monotonically increasing rendering key")
    text: str
    sender: Sender


class DispatchState(str, Enum):
    """Orchestrator state. Success and failure both return to IDLE."""

    IDLE = "idle"
    DISPATCHING = "dispatching"


class Availability(str, Enum):
    """Advisory status shown next to the input box."""

    UNCONFIGURED = "unconfigured"
    OFFLINE = "offline"
    BUSY = "busy"
    READY = "ready"


class SubmitOutcome(str, Enum):
    """What a call to submit() did."""

    REJECTED = "rejected"   # Gate refused: nothing changed, provider not called
    ANSWERED = "answered"   # Provider answered, assistant turn appended
    FAILED = "failed"       # Provider failed, fallback message appended


class SessionSnapshot(BaseModel):
    """Immutable view of a session handed to renderers and observers."""

    model_config = ConfigDict(frozen=True)

    subject: str
    transcript: tuple[DisplayMessage, ...]
    history: tuple[Turn, ...]
    input: str = ""
    pending: bool = False
    configured: bool = False
    live: bool = False
    availability: Availability = Availability.UNCONFIGURED
