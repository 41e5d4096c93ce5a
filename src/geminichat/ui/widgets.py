"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Prompt history recall in the input
- Message and code block rendering
- Copy button feedback
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Key
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..chat import SEND_FAILURE_MESSAGE, Message
from ..rendering import DisplayUnit, copy_text, render_message_text
from .config import (
    ASSISTANT_NAME,
    COPY_CONFIRMATION_SECONDS,
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    USER_NAME,
    WELCOME_TEXT,
    LogLevel,
)


class HistoryInput(Input):
    """Input widget with prompt history support.

    Use Up/Down arrow keys to navigate through previously sent prompts.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_key(self, event: Key) -> None:
        """Handle key events for history navigation."""
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, prompt: str) -> None:
        """Add a sent prompt to history."""
        if prompt and (not self._history or self._history[-1] != prompt):
            self._history.append(prompt)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""

    @property
    def history(self) -> list[str]:
        return list(self._history)


class ChatInputBar(Horizontal):
    """Chat input bar with a single-line input and a Send button.

    Enter and the Send button post the same Submitted message.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self) -> ComposeResult:
        yield HistoryInput(id="chat-input", placeholder=INPUT_PLACEHOLDER)
        yield Button("Send", id="send-btn", variant="primary").with_tooltip(
            "Send prompt (Enter)"
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        send = self.query_one("#send-btn", Button)
        if send.disabled:
            return
        self.post_message(self.Submitted(self.query_one("#chat-input", HistoryInput).value))

    def set_busy(self, busy: bool) -> None:
        """Disable the Send button while a reply is pending."""
        send = self.query_one("#send-btn", Button)
        send.disabled = busy
        send.label = "Waiting" if busy else "Send"

    def set_draft(self, text: str) -> None:
        """Show `text` in the input unless it is already there."""
        text_input = self.query_one("#chat-input", HistoryInput)
        if text_input.value != text:
            text_input.value = text

    def remember(self, prompt: str) -> None:
        self.query_one("#chat-input", HistoryInput).add_to_history(prompt)

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class CodeBlock(Vertical):
    """Syntax-highlighted code with a copy button.

    Copying places the verbatim code on the clipboard; if no clipboard is
    available nothing happens.
    """

    def __init__(self, unit: DisplayUnit, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._unit = unit

    @property
    def copy_text(self) -> str:
        return self._unit.copy_text or ""

    def compose(self) -> ComposeResult:
        language = getattr(self._unit.segment, "language", None) or "text"
        with Horizontal(classes="code-header"):
            yield Static(Text(language), classes="code-language")
            yield Button("Copy", classes="copy-btn").with_tooltip("Copy code to clipboard")
        yield Static(self._unit.renderable, classes="code-body")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.copy_code()

    def copy_code(self) -> bool:
        """Copy the code and briefly show confirmation on the button."""
        copied = copy_text(self.copy_text, fallback=self.app.copy_to_clipboard)
        if copied:
            button = self.query_one(".copy-btn", Button)
            button.label = "Copied"
            button.add_class("-copied")
            self.set_timer(COPY_CONFIRMATION_SECONDS, self._reset_copy_button)
        return copied

    def _reset_copy_button(self) -> None:
        button = self.query_one(".copy-btn", Button)
        button.label = "Copy"
        button.remove_class("-copied")


class MessageView(Vertical):
    """One transcript message: a role header and the rendered content."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        role_class = "user-message" if message.role == "user" else "assistant-message"
        classes = f"chat-message {role_class}"
        if message.role == "assistant" and message.text == SEND_FAILURE_MESSAGE:
            classes += " failed-message"
        super().__init__(*args, classes=classes, **kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        name = USER_NAME if self.message.role == "user" else ASSISTANT_NAME
        timestamp = self.message.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
        yield Static(Text(f"{name} [{timestamp}]"), classes="message-header")

        # Prompts and replies are rendered alike
        for unit in render_message_text(self.message.text):
            if unit.is_code:
                yield CodeBlock(unit)
            else:
                yield Static(unit.renderable, classes="message-content prose")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript that follows the newest message."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0

    def compose(self) -> ComposeResult:
        yield Static(WELCOME_TEXT, id="welcome")

    def add_message(self, message: Message) -> MessageView:
        """Append a message view and scroll it into sight."""
        for welcome in self.query("#welcome"):
            welcome.remove()

        view = MessageView(message)
        self.mount(view)
        self._message_count += 1
        self.border_subtitle = f"{self._message_count} messages"
        self.call_after_refresh(self.scroll_end, animate=False)
        return view

    def set_pending(self, pending: bool) -> None:
        if pending:
            self.border_subtitle = f"{ASSISTANT_NAME} is typing..."
        else:
            self.border_subtitle = f"{self._message_count} messages"


class DebugPanel(RichLog):
    """Session trace, one timestamped line per debug callback entry.

    Entries below `log_level` are dropped. The panel starts hidden; the
    --log-level option or Ctrl+D shows it.
    """

    BORDER_TITLE = "Log"

    _LEVEL_STYLES = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }
    _COMPONENT_STYLES = {
        "TUI": "cyan",
        "Session": "bright_blue",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, highlight=False, auto_scroll=True, wrap=False, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        self.hide()

    def write_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Append `message` from `component` if `level` passes the threshold.

        The message is written as plain text; long messages are truncated.
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
            " ",
            (f"{LogLevel.name(level):<5}", self._LEVEL_STYLES.get(level, "white")),
            " ",
            (f"[{component}]", self._COMPONENT_STYLES.get(component, "white")),
            " ",
            message,
        ))

    def debug(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display
