"""Data models for the conversation.

Hides the representation of messages, the transcript and the interaction state.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["user", "assistant"]


class Message(BaseModel):
    """A chat message in the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who sent the message: 'user' or 'assistant'")
    text: str = Field(description="Message text, non-empty after trimming")
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message text must not be blank")
        return value


class Transcript:
    """Append-only, ordered log of messages.

    Messages alternate user/assistant starting with user. The only time the
    transcript may end with a user message is while a reply is pending.
    """

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = []
        for message in messages or []:
            self.append(message)

    def expected_role(self) -> Role:
        """Role the next appended message must have."""
        if not self._messages or self._messages[-1].role == "assistant":
            return "user"
        return "assistant"

    def append(self, message: Message) -> None:
        expected = self.expected_role()
        if message.role != expected:
            raise ValueError(
                f"Transcript expects a {expected} message next, got {message.role}"
            )
        self._messages.append(message)

    @property
    def awaiting_reply(self) -> bool:
        """True when the last message is a user message without a reply."""
        return bool(self._messages) and self._messages[-1].role == "user"

    def last(self, role: Role | None = None) -> Message | None:
        """Most recent message, optionally restricted to a role."""
        for message in reversed(self._messages):
            if role is None or message.role == role:
                return message
        return None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]


class ExchangePhase(str, Enum):
    """States of the exchange state machine."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class SessionEvent(str, Enum):
    """What changed in a ConversationSession."""

    MESSAGE_APPENDED = "message_appended"
    STATE_CHANGED = "state_changed"
    SESSION_STARTED = "session_started"
    SESSION_FAILED = "session_failed"


@dataclass
class UIState:
    """Interaction state shared by every chat view."""

    draft_input: str = ""
    phase: ExchangePhase = ExchangePhase.IDLE

    @property
    def is_awaiting_reply(self) -> bool:
        return self.phase is ExchangePhase.AWAITING_REPLY
