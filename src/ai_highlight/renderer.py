"""Container markup around rendered highlights.

These never parse anything themselves; they place the output of
:func:`ai_highlight.parser.render` inside a block or inline element.
"""

from __future__ import annotations

import html

from ai_highlight.codes import Mode
from ai_highlight.palettes import DEFAULT_PALETTE, Palette
from ai_highlight.parser import render


def _container(tag: str, inner: str, class_name: str) -> str:
    if class_name:
        return f'<{tag} class="{html.escape(class_name, quote=True)}">{inner}</{tag}>'
    return f"<{tag}>{inner}</{tag}>"


def highlight_renderer(
    content: str,
    mode: Mode | str = Mode.HIGHLIGHTS,
    palette: str | Palette = DEFAULT_PALETTE,
    class_name: str = "",
) -> str:
    """Render ``content`` inside a ``<div>``."""
    return _container("div", render(content, mode, palette), class_name)


def highlight_span(
    content: str,
    mode: Mode | str = Mode.HIGHLIGHTS,
    palette: str | Palette = DEFAULT_PALETTE,
    class_name: str = "",
) -> str:
    """Inline variant of :func:`highlight_renderer`, rendered as a ``<span>``."""
    return _container("span", render(content, mode, palette), class_name)
