"""Tests for the Textual chat view, driven headless through the pilot."""
import asyncio

import pyperclip
from conftest import FakeEndpoint, FakeSessionHandle, wait_until_sent
from textual.widgets import Button, Input, LoadingIndicator

from geminichat.chat import SEND_FAILURE_MESSAGE, ConversationSession, Message, Transcript
from geminichat.ui import GeminiChatApp, LogLevel
from geminichat.ui.widgets import CodeBlock, DebugPanel, HistoryInput, MessageView


async def submit_prompt(app: GeminiChatApp, pilot, prompt: str) -> None:
    """Type a prompt into the input and press Enter."""
    text_input = app.query_one("#chat-input", Input)
    text_input.value = prompt
    await pilot.press("enter")
    await pilot.pause()


async def settle(app: GeminiChatApp, pilot) -> None:
    """Wait for background workers and the resulting refreshes."""
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestChatView:
    """Tests for the exchange flow through the chat view."""

    async def test_welcome_shown_until_first_message(self, session):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            assert len(app.query("#welcome")) == 1

            await submit_prompt(app, pilot, "Hello")
            await settle(app, pilot)

            assert len(app.query("#welcome")) == 0

    async def test_enter_sends_prompt(self, session, fake_handle):
        """Test that Enter appends the prompt and the reply to the view."""
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "  Hello  ")
            await settle(app, pilot)

            assert fake_handle.prompts == ["Hello"]
            assert [(m.role, m.text) for m in session.transcript] == [
                ("user", "Hello"),
                ("assistant", "echo: Hello"),
            ]
            assert len(app.query(MessageView)) == 2
            assert app.query_one("#chat-input", Input).value == ""
            assert "connected" in app.sub_title

    async def test_send_button_sends_prompt(self, session, fake_handle):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#chat-input", Input).value = "Hi"
            app.query_one("#send-btn", Button).press()
            await pilot.pause()
            await settle(app, pilot)

            assert fake_handle.prompts == ["Hi"]

    async def test_blank_prompt_not_sent(self, session, fake_handle):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "   ")
            await settle(app, pilot)

            assert fake_handle.prompts == []
            assert len(app.query(MessageView)) == 0

    async def test_send_disabled_while_awaiting_reply(self):
        """Test that a second prompt cannot be sent before the reply arrives."""
        gate = asyncio.Event()
        handle = FakeSessionHandle(gate=gate)
        session = ConversationSession(endpoint=FakeEndpoint(handle=handle))
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "first")
            await wait_until_sent(handle)
            await pilot.pause()

            send = app.query_one("#send-btn", Button)
            assert send.disabled
            assert app.query_one("#reply-indicator", LoadingIndicator).display
            assert len(app.query(MessageView)) == 1

            await submit_prompt(app, pilot, "second")

            assert handle.prompts == ["first"]
            assert len(session.transcript) == 1

            gate.set()
            await settle(app, pilot)

            assert not send.disabled
            assert not app.query_one("#reply-indicator", LoadingIndicator).display
            assert len(app.query(MessageView)) == 2

    async def test_failed_session_shows_failure_message(self):
        """Test that an unreachable endpoint still answers every prompt."""
        session = ConversationSession(endpoint=FakeEndpoint(start_error=ConnectionError("down")))
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            assert "offline" in app.sub_title

            await submit_prompt(app, pilot, "Hello")
            await settle(app, pilot)

            failed = app.query(".failed-message")
            assert len(failed) == 1
            assert session.transcript[-1].text == SEND_FAILURE_MESSAGE

    async def test_reconnect_after_failure(self):
        """Test that a reconnect starts a new remote session."""
        endpoint = FakeEndpoint(start_error=ConnectionError("down"))
        session = ConversationSession(endpoint=endpoint)
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            endpoint.start_error = None

            app.action_reconnect()
            await settle(app, pilot)

            assert len(endpoint.started) == 2
            assert session.is_connected
            assert "connected" in app.sub_title

    async def test_existing_transcript_rendered_on_mount(self):
        transcript = Transcript([
            Message(role="user", text="Hi"),
            Message(role="assistant", text="Hello!"),
        ])
        session = ConversationSession(endpoint=FakeEndpoint(), transcript=transcript)
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)

            assert len(app.query(MessageView)) == 2
            assert len(app.query("#welcome")) == 0

    async def test_unmount_closes_session(self, session):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            assert session.is_connected

        assert not session.is_connected


class TestCodeBlocks:
    """Tests for code block rendering and copying."""

    async def test_reply_code_blocks_rendered(self, sample_reply):
        handle = FakeSessionHandle(replies=[sample_reply])
        session = ConversationSession(endpoint=FakeEndpoint(handle=handle))
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "Show me")
            await settle(app, pilot)

            blocks = list(app.query(CodeBlock))
            assert [block.copy_text for block in blocks] == [
                "def add(a, b):\n    return a + b",
                "add(1, 2)",
            ]

    async def test_prompt_code_blocks_rendered(self):
        """Test that code pasted into a prompt is highlighted and copyable."""
        transcript = Transcript([
            Message(role="user", text="Why does this fail?\n```python\nprint(x)\n```"),
            Message(role="assistant", text="`x` is undefined."),
        ])
        session = ConversationSession(endpoint=FakeEndpoint(), transcript=transcript)
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)

            user_view = app.query_one(".user-message", MessageView)
            assert [block.copy_text for block in user_view.query(CodeBlock)] == ["print(x)"]

    async def test_copy_button_copies_verbatim(self, sample_reply, monkeypatch):
        """Test that pressing Copy places the exact code on the clipboard."""
        copied = []
        monkeypatch.setattr(pyperclip, "copy", copied.append)
        handle = FakeSessionHandle(replies=[sample_reply])
        session = ConversationSession(endpoint=FakeEndpoint(handle=handle))
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "Show me")
            await settle(app, pilot)

            block = app.query(CodeBlock).first()
            button = block.query_one(".copy-btn", Button)
            button.press()
            await pilot.pause()

            assert copied == ["def add(a, b):\n    return a + b"]
            assert button.has_class("-copied")

    async def test_copy_without_clipboard_is_silent(self, sample_reply, monkeypatch):
        """Test that a missing clipboard leaves the view unchanged."""
        def fail(text):
            raise pyperclip.PyperclipException("no clipboard")

        monkeypatch.setattr(pyperclip, "copy", fail)
        handle = FakeSessionHandle(replies=[sample_reply])
        session = ConversationSession(endpoint=FakeEndpoint(handle=handle))
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            await submit_prompt(app, pilot, "Show me")
            await settle(app, pilot)

            block = app.query(CodeBlock).first()
            monkeypatch.setattr(app, "copy_to_clipboard", fail)

            assert block.copy_code() is False
            assert not block.query_one(".copy-btn", Button).has_class("-copied")


class TestInputHistory:
    """Tests for prompt recall in the input."""

    async def test_up_recalls_previous_prompts(self, session):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)
            for prompt in ("one", "two"):
                await submit_prompt(app, pilot, prompt)
                await settle(app, pilot)

            text_input = app.query_one("#chat-input", HistoryInput)
            assert text_input.history == ["one", "two"]

            await pilot.press("up")
            assert text_input.value == "two"
            await pilot.press("up")
            assert text_input.value == "one"
            await pilot.press("down", "down")
            assert text_input.value == ""


class TestLogPanel:
    """Tests for the log panel."""

    async def test_hidden_by_default(self, session):
        app = GeminiChatApp(session=session)

        async with app.run_test() as pilot:
            await settle(app, pilot)

            assert not app.query_one("#debug-panel", DebugPanel).display

    async def test_shown_with_log_level(self, session):
        app = GeminiChatApp(session=session, log_level="info")

        async with app.run_test() as pilot:
            await settle(app, pilot)
            panel = app.query_one("#debug-panel", DebugPanel)

            assert panel.display
            assert panel.log_level == LogLevel.INFO
            app.action_toggle_debug()
            assert not panel.display

    async def test_entries_below_threshold_dropped(self, session, monkeypatch):
        app = GeminiChatApp(session=session, log_level="warning")

        async with app.run_test() as pilot:
            await settle(app, pilot)
            panel = app.query_one("#debug-panel", DebugPanel)
            written = []
            monkeypatch.setattr(panel, "write", written.append)

            panel.info("TUI", "not shown")
            panel.error("TUI", "[bold]shown[/bold]")

            assert [line.plain.split(" ", 1)[1] for line in written] == [
                "ERROR [TUI] [bold]shown[/bold]",
            ]


class TestLogLevel:
    """Tests for log level names and parsing."""

    def test_from_string(self):
        assert LogLevel.from_string("WARNING") == LogLevel.WARNING
        assert LogLevel.from_string("nonsense") == LogLevel.DEBUG

    def test_name(self):
        assert LogLevel.name(LogLevel.ERROR) == "ERROR"
        assert LogLevel.name(99) == "UNKNOWN"
