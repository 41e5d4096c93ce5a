from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GenerationConfig(BaseModel):
    """Sampling parameters passed through unchanged at session start."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.5, ge=0.0, le=2.0, description="Sampling temperature")
    top_k: int = Field(default=1, ge=1, description="Top-k sampling cutoff")
    top_p: float = Field(default=1.0, ge=0.0, le=1.0, description="Nucleus sampling mass")
    max_output_tokens: int = Field(default=2048, ge=1, description="Maximum length of a reply")


class SafetySetting(BaseModel):
    """A single content-safety rule: block `category` at `threshold` and above."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(description="Harm category, e.g. HARM_CATEGORY_HARASSMENT")
    threshold: str = Field(
        default="BLOCK_MEDIUM_AND_ABOVE",
        description="Block threshold, e.g. BLOCK_MEDIUM_AND_ABOVE"
    )


def default_safety_settings() -> tuple[SafetySetting, ...]:
    return tuple(SafetySetting(category=category) for category in HARM_CATEGORIES)


class SessionConfig(BaseModel):
    """Everything a chat session is constructed from, apart from history."""

    model_config = ConfigDict(frozen=True)

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    safety_settings: tuple[SafetySetting, ...] = Field(
        default_factory=default_safety_settings,
        description="Safety policy; each category appears at most once"
    )

    @field_validator("safety_settings")
    @classmethod
    def _unique_categories(cls, value: tuple[SafetySetting, ...]) -> tuple[SafetySetting, ...]:
        categories = [setting.category for setting in value]
        duplicates = sorted({c for c in categories if categories.count(c) > 1})
        if duplicates:
            raise ValueError(f"Duplicate safety categories: {', '.join(duplicates)}")
        return value


class HistoryEntry(BaseModel):
    """One prior turn in the endpoint's history format."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Endpoint-side role of the turn")
    text: str = Field(description="Turn text")
