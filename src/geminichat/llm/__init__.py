from .base import (
    ChatEndpoint,
    ChatEndpointError,
    ChatSessionHandle,
    EmptyResponseError,
    EndpointConfigurationError,
)
from .factory import create_chat_endpoint
from .models import GenerationConfig, HistoryEntry, SafetySetting, SessionConfig
from .providers import GeminiEndpoint, GeminiSessionHandle

__all__ = [
    "ChatEndpoint",
    "ChatEndpointError",
    "ChatSessionHandle",
    "EmptyResponseError",
    "EndpointConfigurationError",
    "create_chat_endpoint",
    "GenerationConfig",
    "HistoryEntry",
    "SafetySetting",
    "SessionConfig",
    "GeminiEndpoint",
    "GeminiSessionHandle",
]
