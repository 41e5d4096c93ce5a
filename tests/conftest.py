"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from geminichat.chat import ConversationSession
from geminichat.llm import ChatEndpoint, ChatSessionHandle, HistoryEntry, SessionConfig


class FakeSessionHandle(ChatSessionHandle):
    """In-memory session handle recording every prompt it is sent."""

    def __init__(
        self,
        replies: list[str] | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.prompts: list[str] = []
        self._replies = list(replies or [])
        self._error = error
        self._gate = gate

    async def send(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._gate is not None:
            await self._gate.wait()
        if self._error is not None:
            raise self._error
        if self._replies:
            return self._replies.pop(0)
        return f"echo: {prompt}"


class FakeEndpoint(ChatEndpoint):
    """Endpoint handing out FakeSessionHandles, optionally failing to start."""

    def __init__(
        self,
        handle: FakeSessionHandle | None = None,
        start_error: Exception | None = None,
        model: str = "fake-model",
    ) -> None:
        self.handle = handle or FakeSessionHandle()
        self.start_error = start_error
        self.started: list[tuple[SessionConfig, list[HistoryEntry]]] = []
        self.closed = False
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def start_session(self, config: SessionConfig, history: list[HistoryEntry]) -> ChatSessionHandle:
        self.started.append((config, history))
        if self.start_error is not None:
            raise self.start_error
        return self.handle

    async def close(self) -> None:
        self.closed = True


async def wait_until_sent(handle: FakeSessionHandle, count: int = 1) -> None:
    """Yield to the event loop until the handle has received `count` prompts."""
    for _ in range(100):
        if len(handle.prompts) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} prompt(s), got {len(handle.prompts)}")


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def fake_handle():
    return FakeSessionHandle()


@pytest.fixture
def fake_endpoint(fake_handle):
    return FakeEndpoint(handle=fake_handle)


@pytest.fixture
def session(fake_endpoint):
    return ConversationSession(endpoint=fake_endpoint)


@pytest.fixture
def sample_reply():
    """Return a model reply mixing prose and code."""
    return (
        "Here is a function:\n\n"
        "```python\n"
        "def add(a, b):\n"
        "    return a + b\n"
        "```\n\n"
        "And how to call it:\n"
        "```\n"
        "add(1, 2)\n"
        "```"
    )
