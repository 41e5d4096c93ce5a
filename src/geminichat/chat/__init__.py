"""Conversation session module.

Module structure:
- models.py: Message, Transcript and interaction state
- history.py: Transcript to endpoint-history conversion
- session.py: ConversationSession (exchange serialization, session lifecycle)
"""

from .history import to_endpoint_history
from .models import ExchangePhase, Message, SessionEvent, Transcript, UIState
from .session import SEND_FAILURE_MESSAGE, ConversationSession

__all__ = [
    "ConversationSession",
    "ExchangePhase",
    "Message",
    "SEND_FAILURE_MESSAGE",
    "SessionEvent",
    "Transcript",
    "UIState",
    "to_endpoint_history",
]
