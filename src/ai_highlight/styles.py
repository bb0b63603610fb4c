"""Style emitter: one styled ``<span>`` per resolved highlight."""

from __future__ import annotations

from ai_highlight.codes import HighlightCode, Mode
from ai_highlight.palettes import Palette, get_background_color, get_underline_color

UNDERLINE_DECORATION = (
    "text-decoration-thickness:2px;text-underline-offset:2px;text-decoration-skip-ink:none"
)
BOX = "padding:1px 3px 0 3px;border-radius:3px"


def wrap(
    content: str,
    code: HighlightCode | str,
    mode: Mode | str,
    palette: str | Palette,
) -> str:
    """Wrap ``content`` in a span styled for ``code`` under ``mode``.

    ``Mode.NONE`` returns the content unchanged.
    """
    mode = Mode(mode)
    background = get_background_color(palette, code)
    underline = get_underline_color(palette, code)

    if mode is Mode.UNDERLINE:
        style = f"text-decoration:underline {underline};{UNDERLINE_DECORATION}"
    elif mode is Mode.HIGHLIGHTS:
        style = f"background-color:{background};{BOX};display:inline"
    elif mode is Mode.BOTH:
        style = (
            f"background-color:{background};text-decoration:underline {underline};"
            f"{UNDERLINE_DECORATION};{BOX}"
        )
    else:
        return content
    return f'<span style="{style}">{content}</span>'
