"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - transcript over input
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $surface;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#welcome {
    width: 100%;
    height: 1fr;
    content-align: center middle;
    text-align: center;
    text-style: bold;
    color: $text-muted;
}

/* ============================================
   Messages
   ============================================ */
.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.message-header {
    height: 1;
    text-style: bold;
}

.message-content {
    height: auto;
}

.user-message {
    border-left: thick $secondary;
    margin-left: 8;

    & .message-header {
        color: $secondary;
        text-align: right;
    }
}

.assistant-message {
    border-left: thick $primary;
    margin-right: 8;

    & .message-header {
        color: $primary;
    }
}

.failed-message {
    border-left: thick $error;

    & .message-header {
        color: $error;
    }
}

.prose {
    height: auto;
}

/* ============================================
   Code Blocks
   ============================================ */
CodeBlock {
    height: auto;
    margin: 1 0;
    background: $panel;
    border: round $border;
}

.code-header {
    height: 1;
    padding: 0 1;
}

.code-language {
    width: 1fr;
    color: $text-muted;
}

.copy-btn {
    min-width: 8;
    height: 1;
    border: none;
    background: $panel;
    color: $foreground;

    &:hover {
        background: $primary 30%;
    }

    &.-copied {
        color: $success;
    }
}

.code-body {
    height: auto;
    padding: 0 1;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Input Bar
   ============================================ */
#bottom-bar {
    height: auto;
    margin-top: 1;
}

#reply-indicator {
    height: 1;
    display: none;
    color: $primary;
}

#chat-input-bar {
    height: auto;
    background: $surface;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    border: tall $border;
    background: $surface;

    &:focus {
        border: tall $primary;
    }
}

#send-btn {
    min-width: 10;
    margin-left: 1;

    &:disabled {
        background: $panel;
        color: $text-disabled;
    }
}
"""
