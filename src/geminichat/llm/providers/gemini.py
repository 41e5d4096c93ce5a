"""Google Gemini chat endpoint implementation.

Uses the official Google GenAI SDK async chat sessions.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty responses when a prompt or reply is blocked by the
safety policy. Those surface as EmptyResponseError; no retry is attempted.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import ChatEndpoint, ChatSessionHandle, EmptyResponseError, EndpointConfigurationError
from ..models import HistoryEntry, SessionConfig

DEFAULT_MODEL = "gemini-2.5-flash"


def _block_reason(response: Any) -> str | None:
    """Best-effort description of why a response carries no text."""
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None):
        return f"prompt blocked: {feedback.block_reason}"
    if response.candidates:
        finish_reason = getattr(response.candidates[0], "finish_reason", None)
        if finish_reason:
            return f"finish reason: {finish_reason}"
    return None


def extract_text(response: Any) -> str:
    """Extract text content from a Gemini response.

    Args:
        response: Gemini GenerateContentResponse

    Returns:
        Joined text of the first candidate's parts

    Raises:
        EmptyResponseError: If the response has no text
    """
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)

    # Fallback to response.text (may raise or return None)
    try:
        text = response.text or ""
    except (ValueError, AttributeError):
        text = ""
    if not text:
        raise EmptyResponseError(_block_reason(response))
    return text


class GeminiSessionHandle(ChatSessionHandle):
    """Handle wrapping a google-genai AsyncChat."""

    def __init__(self, chat: Any):
        self._chat = chat

    async def send(self, prompt: str) -> str:
        response = await self._chat.send_message(prompt)
        return extract_text(response)


class GeminiEndpoint(ChatEndpoint):
    """Google Gemini chat endpoint.

    Hidden design decisions:
    - Lazy Google GenAI client creation (a missing key is reported on first use)
    - History and configuration conversion to google-genai types
    - A model lookup round trip when a session starts, so bad credentials and
      unreachable endpoints fail at initialization instead of on first send
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        verify_model: bool = True,
        **client_kwargs: Any
    ):
        """Initialize Gemini endpoint.

        Args:
            api_key: Google AI API key (None is accepted and reported on first use)
            model: Model sessions are bound to
            verify_model: Look the model up before opening a session
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._api_key = api_key
        self._model = model
        self._verify_model = verify_model
        self._client_kwargs = client_kwargs
        self._client: genai.Client | None = None

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            raise EndpointConfigurationError("GEMINI_API_KEY is not set")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key, **self._client_kwargs)
        return self._client

    @staticmethod
    def build_config(config: SessionConfig) -> types.GenerateContentConfig:
        """Convert a SessionConfig to the google-genai request config."""
        generation = config.generation
        return types.GenerateContentConfig(
            temperature=generation.temperature,
            top_k=generation.top_k,
            top_p=generation.top_p,
            max_output_tokens=generation.max_output_tokens,
            safety_settings=[
                types.SafetySetting(category=setting.category, threshold=setting.threshold)
                for setting in config.safety_settings
            ],
        )

    @staticmethod
    def build_history(history: list[HistoryEntry]) -> list[types.Content]:
        """Convert history entries to google-genai contents."""
        return [
            types.Content(role=entry.role, parts=[types.Part(text=entry.text)])
            for entry in history
        ]

    async def start_session(
        self,
        config: SessionConfig,
        history: list[HistoryEntry],
    ) -> GeminiSessionHandle:
        client = self._get_client()
        if self._verify_model:
            await client.aio.models.get(model=self._model)

        chat = client.aio.chats.create(
            model=self._model,
            config=self.build_config(config),
            history=self.build_history(history),
        )
        return GeminiSessionHandle(chat)

    async def close(self) -> None:
        """Drop the client.

        Note: The Google GenAI client doesn't require explicit closing,
        sessions created from it simply stop being usable.
        """
        self._client = None
