"""The two conversation logs.

TurnHistory is what the model sees; Transcript is what the user sees.
They have different shapes and audiences and diverge on failed
exchanges, where only the transcript records the fallback message.
"""

from collections.abc import Iterator
from itertools import count

from ..llm.models import Turn, TurnRole
from .models import DisplayMessage, Sender


class TurnHistory:
    """Append-only context window, seeded with a single system turn."""

    def __init__(self, system_prompt: str):
        self._turns: list[Turn] = [Turn(role=TurnRole.SYSTEM, content=system_prompt)]

    def append(self, role: TurnRole, content: str) -> Turn:
        """Append a user or assistant turn.

        Raises:
            ValueError: If role is SYSTEM; only the seed may be a system turn
        """
        if role == TurnRole.SYSTEM:
            raise ValueError("System turn is seeded once and cannot be appended")
        turn = Turn(role=role, content=content)
        self._turns.append(turn)
        return turn

    @property
    def system_turn(self) -> Turn:
        return self._turns[0]

    def snapshot(self) -> tuple[Turn, ...]:
        """Current turns, in send order."""
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))


class Transcript:
    """Append-only list of display messages with sequential ids."""

    def __init__(self, greeting: str):
        self._ids = count(1)
        self._messages: list[DisplayMessage] = []
        self.append(Sender.BOT, greeting)

    def append(self, sender: Sender, text: str) -> DisplayMessage:
        message = DisplayMessage(id=next(self._ids), text=text, sender=sender)
        self._messages.append(message)
        return message

    def snapshot(self) -> tuple[DisplayMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[DisplayMessage]:
        return iter(tuple(self._messages))
