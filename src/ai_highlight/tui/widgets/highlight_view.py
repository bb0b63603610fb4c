"""Highlight view — static widget showing highlight-annotated text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from ai_highlight.codes import Mode
from ai_highlight.palettes import DEFAULT_PALETTE, Palette
from ai_highlight.terminal import render_text

if TYPE_CHECKING:
    from rich.text import Text


class HighlightView(Static):
    """Display ``content`` with its highlight codes rendered for the terminal."""

    def __init__(
        self,
        content: str,
        *,
        mode: Mode | str = Mode.HIGHLIGHTS,
        palette: str | Palette = DEFAULT_PALETTE,
        id: str | None = None,  # noqa: A002
        classes: str | None = None,
    ) -> None:
        self._source = content
        self._highlight_mode = Mode(mode)
        self._highlight_palette = palette
        super().__init__(self._rendered(), id=id, classes=classes)

    @property
    def source(self) -> str:
        """The raw annotated text."""
        return self._source

    @property
    def highlight_mode(self) -> Mode:
        return self._highlight_mode

    @property
    def highlight_palette(self) -> str | Palette:
        return self._highlight_palette

    def _rendered(self) -> Text:
        return render_text(self._source, self._highlight_mode, self._highlight_palette)

    def set_content(self, content: str) -> None:
        """Replace the annotated text."""
        self._source = content
        self.update(self._rendered())

    def restyle(
        self,
        *,
        mode: Mode | str | None = None,
        palette: str | Palette | None = None,
    ) -> None:
        """Change mode and/or palette and re-render."""
        if mode is not None:
            self._highlight_mode = Mode(mode)
        if palette is not None:
            self._highlight_palette = palette
        self.update(self._rendered())
