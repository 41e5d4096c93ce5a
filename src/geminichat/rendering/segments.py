"""Code block extraction.

Splits a completion into prose and fenced code segments. The scan is a plain
string search rather than a CommonMark parse: fences are recognized anywhere in
the text, and an unterminated fence runs to the end of the input.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

FENCE = "```"

_LANGUAGE_TAG = re.compile(r"\w[\w+#.-]*")


@dataclass(frozen=True)
class ProseSegment:
    """Markdown prose between code blocks."""

    markdown_text: str


@dataclass(frozen=True)
class CodeSegment:
    """A fenced code block."""

    language: str | None
    source_text: str


Segment = ProseSegment | CodeSegment


def _language_tag(info_line: str) -> str | None:
    """First token of the opening line, if it looks like a language name."""
    tokens = info_line.split()
    if not tokens:
        return None
    match = _LANGUAGE_TAG.fullmatch(tokens[0])
    return match.group(0) if match else None


def _strip_final_newline(code: str) -> str:
    return code[:-1] if code.endswith("\n") else code


def _prose(text: str) -> Iterator[ProseSegment]:
    if text.strip():
        yield ProseSegment(markdown_text=text)


def extract_segments(text: str) -> Iterator[Segment]:
    """Yield the prose and code segments of `text` in source order.

    Rules:
    - The first token after an opening fence (up to whitespace) is the language
      tag; code starts on the next line.
    - A fence closed on its own opening line is a one-line block without language.
    - One newline right before the closing fence is dropped from the code.
    - An unterminated fence is closed at the end of the text.
    - Whitespace-only prose between blocks is skipped.

    Args:
        text: Raw completion text

    Yields:
        ProseSegment and CodeSegment values
    """
    position = 0
    length = len(text)

    while position < length:
        start = text.find(FENCE, position)
        if start == -1:
            yield from _prose(text[position:])
            return

        yield from _prose(text[position:start])

        info_start = start + len(FENCE)
        line_end = text.find("\n", info_start)
        info_end = length if line_end == -1 else line_end

        inline_close = text.find(FENCE, info_start, info_end)
        if inline_close != -1:
            yield CodeSegment(language=None, source_text=text[info_start:inline_close])
            position = inline_close + len(FENCE)
            continue

        language = _language_tag(text[info_start:info_end])
        code_start = length if line_end == -1 else line_end + 1

        close = text.find(FENCE, code_start)
        if close == -1:
            code = text[code_start:]
            position = length
        else:
            code = text[code_start:close]
            position = close + len(FENCE)

        yield CodeSegment(language=language, source_text=_strip_final_newline(code))
