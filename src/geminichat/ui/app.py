"""Main Textual TUI application.

Composes the chat view and keeps it in sync with a ConversationSession.
The session is the only state owner; the app forwards user actions to it and
re-renders on the events it publishes.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, LoadingIndicator

from ..chat import ConversationSession, SessionEvent
from ..rendering import copy_text
from .config import LogLevel
from .styles import APP_CSS
from .themes import GEMINI_NIGHT
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class GeminiChatApp(App):
    """Textual chat view over a ConversationSession."""

    CSS = APP_CSS
    TITLE = "Gemini Chat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+y", "copy_last_reply", "Copy Reply"),
        Binding("ctrl+r", "reconnect", "Reconnect"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(self, session: ConversationSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._unsubscribe = None

    @property
    def session(self) -> ConversationSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield LoadingIndicator(id="reply-indicator")
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(GEMINI_NIGHT)
        self.theme = "gemini-night"

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._route_debug)
        self._unsubscribe = self._session.subscribe(self._on_session_event)
        self._update_subtitle("connecting")

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        for message in self._session.transcript:
            chat.add_message(message)
        self._sync_state()

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()
        self._start_session()

    def on_unmount(self) -> None:
        """Drop the session handle when the view goes away."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session.set_debug_callback(None)
        self._session.close()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def _update_subtitle(self, status: str) -> None:
        self.sub_title = f"{self._session.model} | {status}"

    def _on_session_event(self, event: SessionEvent, session: ConversationSession) -> None:
        if event is SessionEvent.MESSAGE_APPENDED:
            chat = self.query_one("#chat-history", ChatHistoryWidget)
            chat.add_message(session.transcript[-1])
        elif event is SessionEvent.STATE_CHANGED:
            self._sync_state()
        elif event is SessionEvent.SESSION_STARTED:
            self._update_subtitle("connected")
        elif event is SessionEvent.SESSION_FAILED:
            self._update_subtitle("offline")
            self.notify(
                "Could not start a chat session (Ctrl+R to retry)",
                severity="error",
                timeout=5,
            )

    def _sync_state(self) -> None:
        """Reflect the session's interaction state in the widgets."""
        state = self._session.state
        bar = self.query_one("#chat-input-bar", ChatInputBar)
        bar.set_busy(state.is_awaiting_reply)
        bar.set_draft(state.draft_input)
        self.query_one("#reply-indicator", LoadingIndicator).display = state.is_awaiting_reply
        self.query_one("#chat-history", ChatHistoryWidget).set_pending(state.is_awaiting_reply)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "chat-input":
            self._session.update_draft(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission from Enter or the Send button."""
        if self._session.is_awaiting_reply:
            self._route_debug("debug", "TUI", "Submission ignored while a reply is pending")
            return
        prompt = event.value.strip()
        if not prompt:
            return

        self.query_one("#chat-input-bar", ChatInputBar).remember(prompt)
        self._send(prompt)

    @work(group="exchange")
    async def _send(self, prompt: str) -> None:
        """Run one exchange as a background async worker.

        Not exclusive: a running exchange is never cancelled by a new one, the
        session ignores submissions while it is busy instead.
        """
        await self._session.submit(prompt)

    @work(group="session")
    async def _start_session(self) -> None:
        await self._session.initialize()

    @work(group="session")
    async def _reconnect(self) -> None:
        self._update_subtitle("connecting")
        await self._session.reinitialize()

    def action_reconnect(self) -> None:
        """Start a new remote session seeded with the conversation so far."""
        if self._session.is_awaiting_reply:
            self.notify("Wait for the reply before reconnecting", severity="warning", timeout=3)
            return
        self._reconnect()

    def action_copy_last_reply(self) -> None:
        """Copy the last assistant reply to the clipboard."""
        reply = self._session.transcript.last("assistant")
        if reply is None:
            self.notify("No reply to copy", severity="warning")
            return
        if copy_text(reply.text, fallback=self.copy_to_clipboard):
            self.notify("Reply copied", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(session: ConversationSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Conversation session to drive (not yet initialized)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = GeminiChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
