"""Endpoint and session factory functions for CLI.

Centralizes creation of the chat endpoint and session from environment
variables and command options. Hides configuration details from command
implementations.

Environment variables (a .env file in the working directory is honored):
    GEMINI_API_KEY: Gemini API key (read once, at import)
    GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
"""

import os
from typing import Any

from dotenv import load_dotenv
from rich.console import Console

from ..chat import ConversationSession
from ..llm import ChatEndpoint, GenerationConfig, SessionConfig, create_chat_endpoint
from ..ui.config import LogLevel

load_dotenv()

# A missing key is not an error here; the endpoint reports it on first use
GEMINI_API_KEY: str | None = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")


def get_endpoint(model: str | None = None) -> ChatEndpoint:
    """Create the Gemini chat endpoint.

    Args:
        model: Model override (default: GEMINI_MODEL)

    Returns:
        Chat endpoint instance
    """
    return create_chat_endpoint("gemini", api_key=GEMINI_API_KEY, model=model or GEMINI_MODEL)


def build_session_config(
    temperature: float | None = None,
    top_k: int | None = None,
    top_p: float | None = None,
    max_output_tokens: int | None = None,
) -> SessionConfig:
    """Build a session config, keeping defaults for options not given.

    Raises:
        pydantic.ValidationError: If a value is out of range
    """
    overrides = {
        "temperature": temperature,
        "top_k": top_k,
        "top_p": top_p,
        "max_output_tokens": max_output_tokens,
    }
    generation = GenerationConfig(**{k: v for k, v in overrides.items() if v is not None})
    return SessionConfig(generation=generation)


def create_session(endpoint: ChatEndpoint, config: SessionConfig) -> ConversationSession:
    return ConversationSession(endpoint=endpoint, config=config)


def console_debug_callback(console: Console, log_level: str) -> Any:
    """Debug callback printing entries at or above `log_level` to the console."""
    threshold = LogLevel.from_string(log_level)
    level_colors = {
        "debug": "dim white",
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
    }

    def _callback(level: str, component: str, message: str) -> None:
        if LogLevel.from_string(level) < threshold:
            return
        color = level_colors.get(level, "white")
        console.print(f"[{color}]{level.upper():<5}[/] [dim]\\[{component}][/dim] ", end="")
        console.print(message, markup=False, highlight=False)

    return _callback
