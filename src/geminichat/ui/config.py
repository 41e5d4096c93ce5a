"""UI constants and log panel levels."""


class LogLevel:
    """Log panel thresholds; numeric values match the `logging` module."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {"debug": DEBUG, "info": INFO, "warning": WARNING, "error": ERROR}

    @classmethod
    def name(cls, level: int) -> str:
        for name, value in cls._by_name.items():
            if value == level:
                return name.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Threshold for a --log-level value. Unknown names show everything."""
        return cls._by_name.get(level_str.lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum remembered prompts

# Copy button feedback
COPY_CONFIRMATION_SECONDS = 2.0  # How long "Copied" stays on the button

# Chat display configuration
ASSISTANT_NAME = "Gemini"
USER_NAME = "You"
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
WELCOME_TEXT = "Start chatting with your favorite Gemini here!"
INPUT_PLACEHOLDER = "Enter your prompt"

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
