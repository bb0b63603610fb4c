"""Textual App — terminal preview of highlight-annotated text."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header

from ai_highlight.codes import Mode
from ai_highlight.config import Settings
from ai_highlight.tui.help_screen import HelpScreen
from ai_highlight.tui.widgets.highlight_view import HighlightView

if TYPE_CHECKING:
    from textual.binding import BindingType

MODE_CYCLE = (Mode.HIGHLIGHTS, Mode.UNDERLINE, Mode.BOTH, Mode.NONE)


class PreviewApp(App[None]):
    """Preview highlight codes with switchable mode and palette."""

    TITLE = "ai-highlight"

    CSS = """
    #preview-scroll {
        height: 1fr;
    }
    #preview {
        padding: 1 2;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
        Binding("m", "cycle_mode", "Mode", show=True),
        Binding("p", "cycle_palette", "Palette", show=True),
    ]

    def __init__(
        self,
        text: str,
        settings: Settings | None = None,
        *,
        mode: Mode | str | None = None,
        palette: str | None = None,
    ) -> None:
        super().__init__()
        self._text = text
        self._settings = settings if settings is not None else Settings()
        self._highlight_mode = Mode(mode) if mode is not None else self._settings.mode
        self._palette_name = self._settings.get_palette(palette).name

    @property
    def highlight_mode(self) -> Mode:
        return self._highlight_mode

    @property
    def palette_name(self) -> str:
        return self._palette_name

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="preview-scroll"):
            yield HighlightView(
                self._text,
                mode=self._highlight_mode,
                palette=self._settings.get_palette(self._palette_name),
                id="preview",
            )
        yield Footer()

    def on_mount(self) -> None:
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.sub_title = f"{self._highlight_mode} · {self._palette_name}"

    def _restyle(self) -> None:
        view = self.query_one(HighlightView)
        view.restyle(
            mode=self._highlight_mode,
            palette=self._settings.get_palette(self._palette_name),
        )
        self._update_subtitle()

    # === Actions ===

    def action_cycle_mode(self) -> None:
        """Switch to the next rendering mode."""
        index = MODE_CYCLE.index(self._highlight_mode)
        self._highlight_mode = MODE_CYCLE[(index + 1) % len(MODE_CYCLE)]
        self._restyle()

    def action_cycle_palette(self) -> None:
        """Switch to the next available palette."""
        names = list(self._settings.palettes)
        self._palette_name = names[(names.index(self._palette_name) + 1) % len(names)]
        self._restyle()

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())
