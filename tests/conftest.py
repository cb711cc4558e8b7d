"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Sequence
from typing import Any

import pytest

from tickerchat.config import StaticConfigService
from tickerchat.i18n import CatalogLocalizer
from tickerchat.llm import LLMProvider, LLMResponse, Turn
from tickerchat.notify import Notifier
from tickerchat.session import create_session


class FakeProvider(LLMProvider):
    """Scripted provider double.

    Each call pops the next item from `script`: a string is returned as
    the response content, an exception instance is raised. When `gate`
    is set, calls block until it is released.
    """

    def __init__(self, script: Sequence[Any] = ("Bullish.",), gate: asyncio.Event | None = None):
        self.script = list(script)
        self.gate = gate
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def chat_completion(
        self,
        messages: Sequence[Turn],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.gate is not None:
            await self.gate.wait()
        item = self.script.pop(0) if self.script else "ok"
        if isinstance(item, BaseException):
            raise item
        return LLMResponse(content=item, model=model or "fake-model")

    async def close(self) -> None:
        self.closed = True


class RecordingNotifier(Notifier):
    """Collects notices for assertions."""

    def __init__(self):
        self.successes: list[str] = []
        self.failures: list[str] = []

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_failure(self, message: str) -> None:
        self.failures.append(message)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY"),
        "anthropic": os.getenv("ANTHROPIC_API_KEY"),
    }


@pytest.fixture
def localizer():
    return CatalogLocalizer("en")


@pytest.fixture
def fallback_text(localizer):
    """The single apology shown when a dispatch fails."""
    return localizer.translate("chat.fallback")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_session(localizer, notifier):
    """Factory for sessions wired to a FakeProvider."""

    def _make(provider=None, configured=True, live=True, subject="AAPL", **kwargs):
        provider = provider if provider is not None else FakeProvider()
        return create_session(
            subject,
            provider,
            StaticConfigService(configured),
            live=live,
            localizer=localizer,
            notifier=notifier,
            **kwargs,
        )

    return _make
