"""System clipboard access.

Copies go through pyperclip (pbcopy, xclip/xsel/wl-copy, or the Windows API);
callers may pass a fallback such as Textual's OSC 52 copy for terminals
without a native clipboard tool.
"""

from collections.abc import Callable

import pyperclip


def copy_text(text: str, fallback: Callable[[str], None] | None = None) -> bool:
    """Place `text` verbatim on the system clipboard.

    Never raises: when no clipboard mechanism works the copy is skipped.

    Args:
        text: Text to copy, unchanged
        fallback: Optional second mechanism tried when pyperclip fails

    Returns:
        True if one of the mechanisms accepted the text
    """
    try:
        pyperclip.copy(text)
        return True
    except Exception:
        pass

    if fallback is None:
        return False
    try:
        fallback(text)
        return True
    except Exception:
        return False
