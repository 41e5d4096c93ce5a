from collections.abc import Iterable

from ..llm.models import HistoryEntry
from .models import Message

_ENDPOINT_ROLES = {
    "user": "user",
    "assistant": "model",
}


def to_endpoint_history(transcript: Iterable[Message]) -> list[HistoryEntry]:
    """Convert transcript messages to the endpoint's history format.

    Pure; called once per session handle construction.
    """
    return [
        HistoryEntry(role=_ENDPOINT_ROLES[message.role], text=message.text)
        for message in transcript
    ]
