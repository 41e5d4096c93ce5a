from abc import ABC, abstractmethod
from typing import Any

from .models import HistoryEntry, SessionConfig


class ChatEndpointError(Exception):
    """Base class for remote chat endpoint errors."""


class EndpointConfigurationError(ChatEndpointError):
    """The endpoint is missing required configuration (e.g. the API key)."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class EmptyResponseError(ChatEndpointError):
    """The endpoint answered without any text (safety block or service issue)."""

    def __init__(self, reason: str | None = None):
        msg = "Empty response from endpoint"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.reason = reason


class ChatSessionHandle(ABC):
    """Opaque reference to a remote conversational context.

    A handle is seeded with prior turns when it is created and keeps its own
    history afterwards. It is never re-seeded in place: callers that need a
    different history ask the endpoint for a new handle.
    """

    @abstractmethod
    async def send(self, prompt: str) -> str:
        """Send one prompt and return the full reply text.

        Raises:
            ChatEndpointError: If the reply is unusable
            Exception: Transport or provider errors are passed through
        """


class ChatEndpoint(ABC):
    """Abstract base class for stateful remote chat endpoints.

    This module hides the design decision of which chat service to talk to.
    Implementations handle provider-specific details like:
    - API client setup and authentication
    - Conversion of history and configuration to the wire format
    - Extracting reply text from provider responses

    Supports async context manager protocol for proper resource cleanup:
        async with endpoint:
            handle = await endpoint.start_session(config, history)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Name of the model sessions are bound to."""

    @abstractmethod
    async def start_session(
        self,
        config: SessionConfig,
        history: list[HistoryEntry],
    ) -> ChatSessionHandle:
        """Open a new remote session seeded with `history`.

        Args:
            config: Generation parameters and safety policy, passed through unchanged
            history: Prior turns, oldest first

        Returns:
            A handle bound to the new session

        Raises:
            EndpointConfigurationError: If credentials are missing
            Exception: If the endpoint cannot be reached
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ChatEndpoint":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup, a known
        harmless race in httpx/anyio teardown.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
