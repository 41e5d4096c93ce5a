"""Terminal UI module for geminichat.

Provides a Textual-based chat view over a ConversationSession.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (input history, message and code block rendering, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: UI constants and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import GeminiChatApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, CodeBlock, DebugPanel, MessageView

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "CodeBlock",
    "DebugPanel",
    "GeminiChatApp",
    "LogLevel",
    "MessageView",
    "run_textual_tui",
]
