"""Segment rendering.

Hides how prose and code segments become displayable rich renderables:
- Markdown conversion for prose (rich's markdown-it based renderer, GFM tables)
- Pygments lexer lookup and syntax highlighting for code
- Removal of terminal control sequences from untrusted model output
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import RenderableType
from rich.markdown import Markdown
from rich.syntax import Syntax

from .segments import CodeSegment, ProseSegment, Segment, extract_segments

CODE_THEME = "monokai"
PLAIN_LEXER = "text"

# CSI, OSC and two-character escape sequences
_ESCAPE_SEQUENCE = re.compile(
    r"\x1b(?:\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(?:\x07|\x1b\\)?|[@-Z\\-_])"
)
# C0/C1 controls except tab and newline
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def sanitize_display_text(text: str) -> str:
    """Remove terminal escape sequences and control characters."""
    text = _ESCAPE_SEQUENCE.sub("", text)
    return _CONTROL_CHARS.sub("", text)


def resolve_lexer(language: str | None) -> str:
    """Pygments lexer name for a language tag, or plain text if unknown."""
    if not language:
        return PLAIN_LEXER
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return PLAIN_LEXER
    return language


@dataclass(frozen=True)
class DisplayUnit:
    """A rendered segment.

    `copy_text` is the verbatim code for code units and None for prose.
    """

    segment: Segment
    renderable: RenderableType
    copy_text: str | None = None

    @property
    def is_code(self) -> bool:
        return self.copy_text is not None


def render_prose(segment: ProseSegment, code_theme: str = CODE_THEME) -> Markdown:
    # Links are shown with their URL instead of as terminal hyperlinks
    return Markdown(
        sanitize_display_text(segment.markdown_text),
        code_theme=code_theme,
        hyperlinks=False,
    )


def render_code(segment: CodeSegment, code_theme: str = CODE_THEME) -> Syntax:
    return Syntax(
        sanitize_display_text(segment.source_text),
        resolve_lexer(segment.language),
        theme=code_theme,
        word_wrap=True,
    )


def render_segment(segment: Segment, code_theme: str = CODE_THEME) -> DisplayUnit:
    """Render one segment. Pure; never raises on arbitrary segment text."""
    if isinstance(segment, CodeSegment):
        return DisplayUnit(
            segment=segment,
            renderable=render_code(segment, code_theme),
            copy_text=segment.source_text,
        )
    return DisplayUnit(segment=segment, renderable=render_prose(segment, code_theme))


def render_message_text(text: str, code_theme: str = CODE_THEME) -> Iterable[DisplayUnit]:
    """Extract and render every segment of a message, lazily."""
    return (render_segment(segment, code_theme) for segment in extract_segments(text))
