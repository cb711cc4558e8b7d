"""Dispatch orchestration for a chat session.

ChatSession is the single writer of its SessionState. It accepts input,
appends the user turn to both logs, awaits the provider and reconciles
the outcome:

    IDLE --submit--> DISPATCHING --success/failure--> IDLE

`pending` is set before the provider call is awaited and cleared only
after the completion mutations, so at most one exchange is in flight.
A submit during DISPATCHING is dropped without touching state.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, ConfigService
from ..i18n import Localizer
from ..llm.base import LLMProvider
from ..llm.errors import ProviderResponseError, ProviderTimeoutError
from ..llm.models import Turn, TurnRole
from ..llm.pricing import estimate_cost
from ..notify import Notifier
from .classifier import ErrorClassifier
from .gate import availability, can_accept
from .history import Transcript, TurnHistory
from .models import DispatchState, Sender, SessionSnapshot, SubmitOutcome

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[SessionSnapshot], None]

# Shown when the error classifier itself fails.
LAST_RESORT_FALLBACK = "Sorry, something went wrong while contacting the AI. Please try again."


@dataclass
class SessionState:
    """Mutable state of one conversation. Owned by a single ChatSession."""

    subject: str
    history: TurnHistory
    transcript: Transcript
    input: str = ""
    pending: bool = False
    configured: bool = False
    live: bool = True


class ChatSession:
    """Conversation session manager.

    Exposes a snapshot and the commands set_input() and submit() to the
    rendering layer. Hosts may also push liveness and configuration
    changes; those only alter flags read by the availability gate.
    """

    def __init__(
        self,
        state: SessionState,
        provider: LLMProvider | None,
        config: ConfigService,
        localizer: Localizer,
        notifier: Notifier,
        classifier: ErrorClassifier,
        model: str,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int | None = DEFAULT_MAX_TOKENS,
        response_timeout: float | None = None,
    ):
        self._state = state
        self._provider = provider
        self._config = config
        self._localizer = localizer
        self._notifier = notifier
        self._classifier = classifier
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._response_timeout = response_timeout
        self._dispatch_state = DispatchState.IDLE
        self._subscribers: list[SnapshotCallback] = []

        self._state.configured = self._check_configured()

    @property
    def subject(self) -> str:
        return self._state.subject

    @property
    def model(self) -> str:
        return self._model

    @property
    def dispatch_state(self) -> DispatchState:
        return self._dispatch_state

    @property
    def pending(self) -> bool:
        return self._state.pending

    def can_accept(self) -> bool:
        """Whether the current input buffer would be dispatched."""
        return can_accept(self._state)

    def snapshot(self) -> SessionSnapshot:
        """Immutable view of the session for rendering."""
        state = self._state
        return SessionSnapshot(
            subject=state.subject,
            transcript=state.transcript.snapshot(),
            history=state.history.snapshot(),
            input=state.input,
            pending=state.pending,
            configured=state.configured,
            live=state.live,
            availability=availability(state),
        )

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register an observer called with a snapshot after each mutation.

        Returns:
            A function that removes the observer
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_input(self, text: str) -> None:
        """Replace the input buffer."""
        if text == self._state.input:
            return
        self._state.input = text
        self._publish()

    def set_live(self, live: bool) -> None:
        """Record whether the host considers the assistant online."""
        if live == self._state.live:
            return
        self._state.live = live
        logger.info("Session for %s is now %s", self.subject, "live" if live else "offline")
        self._publish()

    def refresh_configuration(self) -> bool:
        """Re-read the configuration service and return the new flag."""
        configured = self._check_configured()
        if configured != self._state.configured:
            self._state.configured = configured
            logger.info("Provider configured=%s for session %s", configured, self.subject)
            self._publish()
        return configured

    async def submit(self) -> SubmitOutcome:
        """Dispatch the input buffer if the gate allows it.

        Returns:
            REJECTED if nothing happened, otherwise ANSWERED or FAILED
        """
        if self._state.pending:
            logger.debug("Dropping submit for %s: exchange already in flight", self.subject)
            return SubmitOutcome.REJECTED

        self.refresh_configuration()
        text = self._state.input.strip()
        if not can_accept(self._state, text):
            logger.debug("Submit rejected by availability gate for %s", self.subject)
            return SubmitOutcome.REJECTED

        self._append_user_turn(text)
        self._state.pending = True
        self._state.input = ""
        self._dispatch_state = DispatchState.DISPATCHING
        self._publish()

        history = self._state.history.snapshot()
        logger.debug("Dispatching %d turns to %s", len(history), self._model)

        try:
            content = await self._call_provider(history)
        except asyncio.CancelledError:
            self._finish()
            raise
        except Exception as e:
            try:
                self._append_bot_fallback(self._fallback_for(e))
            finally:
                self._finish()
            self._notify(self._notifier.notify_failure, "notify.failure")
            return SubmitOutcome.FAILED

        try:
            self._append_assistant_turn(content)
        finally:
            self._finish()
        logger.info("Exchange for %s answered (%d turns in context)", self.subject, len(self._state.history))
        self._notify(self._notifier.notify_success, "notify.success")
        return SubmitOutcome.ANSWERED

    async def close(self) -> None:
        """Release the provider client. The session is unusable afterwards."""
        if self._provider is not None:
            await self._provider.close()
            self._provider = None
            self._state.configured = False
            self._publish()

    def _fallback_for(self, error: Exception) -> str:
        """Fallback text for a failed dispatch; never raises."""
        try:
            classification = self._classifier.classify(error)
        except Exception:
            logger.exception("Error classifier failed for %s", self.subject)
            logger.warning("Dispatch for %s failed: %s", self.subject, error)
            return LAST_RESORT_FALLBACK

        logger.warning(
            "Dispatch for %s failed (%s, retryable=%s): %s",
            self.subject,
            classification.kind.value,
            classification.retryable,
            error,
        )
        return classification.fallback_text

    async def _call_provider(self, history: tuple[Turn, ...]) -> str:
        """Await the provider, bounded by response_timeout when set."""
        if self._provider is None:
            raise ProviderResponseError("No provider client available")

        call = self._provider.chat_completion(
            list(history),
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        if self._response_timeout is None:
            response = await call
        else:
            try:
                response = await asyncio.wait_for(call, self._response_timeout)
            except asyncio.TimeoutError as e:
                raise ProviderTimeoutError(
                    f"No response within {self._response_timeout}s",
                    provider=self._provider.name,
                ) from e

        cost = estimate_cost(response.usage, response.model)
        if cost is not None:
            logger.debug("Estimated cost for %s: $%.5f (%s)", response.model, cost, response.usage)

        if not response.content.strip():
            logger.warning("Empty response from %s for %s", self._provider.name, self.subject)
            return self._localizer.translate("chat.no_response")
        return response.content

    # Paired appends: both logs change before observers are told.

    def _append_user_turn(self, text: str) -> None:
        self._state.history.append(TurnRole.USER, text)
        self._state.transcript.append(Sender.USER, text)

    def _append_assistant_turn(self, text: str) -> None:
        self._state.history.append(TurnRole.ASSISTANT, text)
        self._state.transcript.append(Sender.BOT, text)

    def _append_bot_fallback(self, text: str) -> None:
        self._state.transcript.append(Sender.BOT, text)

    def _finish(self) -> None:
        self._state.pending = False
        self._dispatch_state = DispatchState.IDLE
        self._publish()

    def _check_configured(self) -> bool:
        return self._provider is not None and self._config.is_configured()

    def _publish(self) -> None:
        if not self._subscribers:
            return
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Session observer %r failed", callback)

    def _notify(self, send: Callable[[str], None], key: str) -> None:
        try:
            send(self._localizer.translate(key))
        except Exception:
            logger.exception("Notifier failed for %s", key)
