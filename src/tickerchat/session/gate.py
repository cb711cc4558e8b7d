"""Availability gate.

Pure predicates over session flags. The rendering layer uses them to
enable the input box and the orchestrator re-checks them at dispatch
time, since `live` and `configured` can change between render and submit.
"""

from typing import Protocol

from .models import Availability


class GateState(Protocol):
    """Flags the gate reads. Satisfied by SessionState and SessionSnapshot."""

    configured: bool
    live: bool
    pending: bool
    input: str


def can_accept(state: GateState, text: str | None = None) -> bool:
    """Return True if the session may dispatch text now.

    Args:
        state: Session flags
        text: Candidate input; defaults to the state's input buffer

    Returns:
        True iff configured, live, not pending and text is not blank
    """
    candidate = state.input if text is None else text
    return (
        state.configured
        and state.live
        and not state.pending
        and bool(candidate.strip())
    )


def availability(state: GateState) -> Availability:
    """Advisory status, independent of the input buffer.

    A missing credential takes precedence over liveness so the user is
    told what to fix first.
    """
    if not state.configured:
        return Availability.UNCONFIGURED
    if not state.live:
        return Availability.OFFLINE
    if state.pending:
        return Availability.BUSY
    return Availability.READY
