"""Inline Markdown emphasis to HTML.

Handles: bold, italic, inline code. Does NOT handle anything block-level;
fenced code blocks are protected by the sanitizer before this runs.
"""

from __future__ import annotations

import re

INLINE_CODE_STYLE = (
    "background:#f1f1f1;padding:2px 4px;border-radius:3px;"
    "font-family:monospace;font-size:0.9em"
)

BOLD_RE = re.compile(r"\*\*([^*]+?)\*\*")
ITALIC_RE = re.compile(r"\*([^*]+?)\*")
INLINE_CODE_RE = re.compile(r"`([^`]+)`")


def apply_markdown(text: str) -> str:
    """Convert ``**bold**``, ``*italic*`` and backtick code spans to HTML."""
    # Bold must go first so ``*`` never matches half of a ``**`` pair.
    text = BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = ITALIC_RE.sub(r"<em>\1</em>", text)
    return INLINE_CODE_RE.sub(rf'<code style="{INLINE_CODE_STYLE}">\1</code>', text)
