"""Highlight-to-Rich-markup converter for terminal output.

Uses the same sanitizer, tokenizer and resolver as the HTML renderer.
Handles: highlight codes, bold, italic, inline code, fenced code blocks.
Emphasis is converted per plain-text run, so ``**bold**`` that straddles
a highlight tag stays literal.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.text import Text

from ai_highlight.codes import HighlightCode, Mode
from ai_highlight.markdown import BOLD_RE, INLINE_CODE_RE, ITALIC_RE
from ai_highlight.palettes import (
    DEFAULT_PALETTE,
    Palette,
    get_background_color,
    get_palette,
    get_underline_color,
)
from ai_highlight.parser import resolve, tokenize
from ai_highlight.sanitizer import clean, protect_code_blocks, restore_code_blocks

if TYPE_CHECKING:
    from collections.abc import Callable


def wrap_markup(
    content: str,
    code: HighlightCode | str,
    mode: Mode | str,
    palette: str | Palette,
) -> str:
    """Wrap already-escaped markup in a Rich style for ``code``."""
    mode = Mode(mode)
    background = get_background_color(palette, code)
    underline = get_underline_color(palette, code)

    if mode is Mode.UNDERLINE:
        style = f"underline {underline}"
    elif mode is Mode.HIGHLIGHTS:
        style = f"on {background}"
    elif mode is Mode.BOTH:
        style = f"underline {underline} on {background}"
    else:
        return content
    return f"[{style}]{content}[/]"


_INLINE_STYLES = ((BOLD_RE, "bold"), (ITALIC_RE, "italic"), (INLINE_CODE_RE, "bold cyan"))

# NUL-delimited style markers and code-block placeholders. Input never
# carries NUL, the sanitizer strips it.
_MARKER_RE = re.compile(r"(\x00(?:/?[a-z ]+|[A-Z]+\d+)\x00)")


def _mark(style: str) -> Callable[[re.Match[str]], str]:
    def _sub(match: re.Match[str]) -> str:
        return f"\x00{style}\x00{match.group(1)}\x00/{style}\x00"

    return _sub


def _convert_inline(run: str) -> str:
    """Apply inline Markdown formatting to a plain-text run and escape the rest.

    Formatting goes in as markers first, so every stretch of literal text is
    escaped on its own and a trailing backslash can never swallow a tag.
    """
    for pattern, style in _INLINE_STYLES:
        run = pattern.sub(_mark(style), run)

    out: list[str] = []
    for i, part in enumerate(_MARKER_RE.split(run)):
        if i % 2 == 0:
            out.append(escape(part))
        elif part[1].isupper():
            # Code block placeholder, restored after resolving
            out.append(part)
        else:
            out.append(f"[{part[1:-1]}]")
    return "".join(out)


def _format_code_block(block: str) -> str:
    """Render a fenced block as a dim indented block, without fences."""
    lines = block[3:-3].split("\n")
    if len(lines) > 1:
        # First line holds the language hint, last one the closing fence
        lines = lines[1:]
        if not lines[-1].strip():
            lines = lines[:-1]
    return "[dim]" + escape("\n".join(f"  {line}" for line in lines)) + "[/dim]"


def render_markup(
    text: str,
    mode: Mode | str = Mode.HIGHLIGHTS,
    palette: str | Palette = DEFAULT_PALETTE,
) -> str:
    """Convert highlight-annotated text to Rich console markup."""
    mode = Mode(mode)
    if not text:
        return ""

    protected, blocks = protect_code_blocks(text)
    colors = get_palette(palette)
    markup = resolve(
        tokenize(clean(protected)),
        lambda content, code: wrap_markup(content, code, mode, colors),
        _convert_inline,
    )
    return restore_code_blocks(markup, [_format_code_block(block) for block in blocks])


def render_text(
    text: str,
    mode: Mode | str = Mode.HIGHLIGHTS,
    palette: str | Palette = DEFAULT_PALETTE,
) -> Text:
    """Like :func:`render_markup` but returns a Rich ``Text``."""
    return Text.from_markup(render_markup(text, mode, palette))
