"""Conversation session: owns the transcript and the remote session handle.

Every prompt/response exchange goes through ConversationSession.submit, which
keeps at most one exchange in flight and always answers a user message with
exactly one assistant message, even when the endpoint fails.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..llm.base import ChatEndpoint, ChatSessionHandle
from ..llm.models import SessionConfig
from .history import to_endpoint_history
from .models import ExchangePhase, Message, SessionEvent, Transcript, UIState

SEND_FAILURE_MESSAGE = "Failed to send message"

SessionListener = Callable[[SessionEvent, "ConversationSession"], None]


def _truncate(text: str, limit: int = 80) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class ConversationSession:
    """State object for one chat: transcript, session handle and UI state.

    State is mutated only through the methods below; views observe it with
    subscribe() and re-render on the events they care about.
    """

    def __init__(
        self,
        endpoint: ChatEndpoint,
        config: SessionConfig | None = None,
        transcript: Transcript | None = None,
    ) -> None:
        if transcript is not None and transcript.awaiting_reply:
            raise ValueError("Transcript ends with a user message that has no reply")

        self._endpoint = endpoint
        self._config = config or SessionConfig()
        self._transcript = transcript if transcript is not None else Transcript()
        self._state = UIState()
        self._handle: ChatSessionHandle | None = None
        # Held while a handle is being built so a send never races construction
        self._handle_lock = asyncio.Lock()
        self._listeners: list[SessionListener] = []
        self._debug_callback: Any | None = None

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def state(self) -> UIState:
        return self._state

    @property
    def model(self) -> str:
        return self._endpoint.model

    @property
    def is_awaiting_reply(self) -> bool:
        return self._state.is_awaiting_reply

    @property
    def is_connected(self) -> bool:
        """True when a session handle is available."""
        return self._handle is not None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called after every mutation.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent) -> None:
        # A failing listener must not interrupt a state transition
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as e:
                self._debug("error", f"Listener failed on {event.value}: {e}")

    async def initialize(self) -> bool:
        """Build a session handle seeded with the current transcript.

        Failures are logged and leave the handle unset; later submissions then
        answer with the failure message instead of raising.

        Returns:
            True if a handle was created
        """
        async with self._handle_lock:
            history = to_endpoint_history(self._transcript)
            self._debug("info", f"Starting session on {self.model} with {len(history)} prior message(s)")
            try:
                self._handle = await self._endpoint.start_session(self._config, history)
            except Exception as e:
                self._handle = None
                self._debug("error", f"Session initialization failed: {e}")
                self._emit(SessionEvent.SESSION_FAILED)
                return False

        self._debug("info", "Session ready")
        self._emit(SessionEvent.SESSION_STARTED)
        return True

    async def reinitialize(self) -> bool:
        """Replace the session handle with one seeded from the transcript so far.

        Only allowed while idle.

        Returns:
            True if a new handle was created
        """
        if self.is_awaiting_reply:
            self._debug("warning", "Reconnect ignored while a reply is pending")
            return False
        return await self.initialize()

    def update_draft(self, text: str) -> None:
        """Store the draft input. Editing is allowed in every phase."""
        if text == self._state.draft_input:
            return
        self._state.draft_input = text
        self._emit(SessionEvent.STATE_CHANGED)

    def _set_phase(self, phase: ExchangePhase) -> None:
        self._state.phase = phase
        self._emit(SessionEvent.STATE_CHANGED)

    def _append(self, message: Message) -> None:
        self._transcript.append(message)
        self._emit(SessionEvent.MESSAGE_APPENDED)

    async def submit(self, prompt_text: str) -> Message | None:
        """Run one prompt/response exchange.

        Blank prompts and prompts submitted while a reply is pending are
        ignored: nothing is appended and nothing is sent.

        Args:
            prompt_text: Raw user input

        Returns:
            The assistant message appended for this exchange, or None if the
            submission was ignored
        """
        text = prompt_text.strip()
        if not text:
            self._debug("debug", "Ignoring blank prompt")
            return None
        if self.is_awaiting_reply:
            self._debug("debug", "Ignoring prompt while a reply is pending")
            return None

        # Everything up to the first await runs atomically on the event loop
        self._append(Message(role="user", text=text))
        self._state.draft_input = ""
        self._set_phase(ExchangePhase.AWAITING_REPLY)

        # The user message is always answered, even if the exchange is cancelled
        reply_text = SEND_FAILURE_MESSAGE
        try:
            reply_text = await self._exchange(text)
        finally:
            reply = Message(role="assistant", text=reply_text)
            self._append(reply)
            self._set_phase(ExchangePhase.IDLE)
        return reply

    async def _exchange(self, text: str) -> str:
        """Send one prompt; return the reply or the failure message."""
        async with self._handle_lock:
            handle = self._handle

        if handle is None:
            self._debug("error", "No session available, cannot send message")
            return SEND_FAILURE_MESSAGE

        self._debug("info", f"Sending prompt ({len(text)} chars): {_truncate(text)}")
        try:
            reply = await handle.send(text)
        except Exception as e:
            self._debug("error", f"Failed to send message: {e}")
            return SEND_FAILURE_MESSAGE

        if not reply.strip():
            self._debug("error", "Failed to send message: empty reply")
            return SEND_FAILURE_MESSAGE

        self._debug("info", f"Reply received ({len(reply)} chars)")
        return reply

    def close(self) -> None:
        """Drop the session handle. The transcript is not persisted."""
        self._handle = None
        self._listeners.clear()
        self._debug("debug", "Session closed")
