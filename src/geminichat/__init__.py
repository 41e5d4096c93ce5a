"""
geminichat: A terminal chat client for Google Gemini.

Each module hides a specific design decision: the remote endpoint (llm),
the conversation state (chat), response rendering (rendering) and the
interactive views (ui, cli).
"""

__version__ = "0.1.0"

from .chat import ConversationSession, Message, Transcript
from .llm import SessionConfig, create_chat_endpoint
from .rendering import extract_segments, render_segment

__all__ = [
    "ConversationSession",
    "Message",
    "SessionConfig",
    "Transcript",
    "create_chat_endpoint",
    "extract_segments",
    "render_segment",
]
