from .gemini import GeminiEndpoint, GeminiSessionHandle

__all__ = ["GeminiEndpoint", "GeminiSessionHandle"]
