from typing import Any

from .base import ChatEndpoint
from .providers import GeminiEndpoint


def create_chat_endpoint(provider: str, **config: Any) -> ChatEndpoint:
    """Create a chat endpoint instance.

    This factory function hides the instantiation logic for endpoint providers.

    Args:
        provider: Provider type ('gemini' or its alias 'google')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str | None (required key; a None value is reported
                  when the first session starts)
                - model: str (default: 'gemini-2.5-flash')
                - verify_model: bool (default: True)

    Returns:
        Initialized chat endpoint

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> endpoint = create_chat_endpoint(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("gemini", "google"):
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiEndpoint(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
