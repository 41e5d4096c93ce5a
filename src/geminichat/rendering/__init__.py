"""Response rendering module.

Module structure:
- segments.py: Code block extraction (prose/code segments)
- renderer.py: Segment to rich renderable conversion
- clipboard.py: Copying code to the system clipboard
"""

from .clipboard import copy_text
from .renderer import (
    DisplayUnit,
    render_message_text,
    render_segment,
    resolve_lexer,
    sanitize_display_text,
)
from .segments import CodeSegment, ProseSegment, Segment, extract_segments

__all__ = [
    "CodeSegment",
    "DisplayUnit",
    "ProseSegment",
    "Segment",
    "copy_text",
    "extract_segments",
    "render_message_text",
    "render_segment",
    "resolve_lexer",
    "sanitize_display_text",
]
