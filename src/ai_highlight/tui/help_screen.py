"""Help screen — modal overlay showing keybindings and the code legend."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.containers import Center, Middle
from textual.screen import ModalScreen
from textual.widgets import Static

from ai_highlight.codes import HIGHLIGHT_MEANINGS

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

_KEYS_HELP = """\
[bold]Preview Keybindings[/bold]

  [bold]m[/bold]         Cycle mode
  [bold]p[/bold]         Cycle palette
  [bold]?[/bold]         This help
  [bold]q[/bold]         Quit
"""


def _legend() -> str:
    lines = ["[bold]Highlight Codes[/bold]", ""]
    lines.extend(
        f"  [bold]{code:<3}[/bold]  {meaning}"
        for code, meaning in HIGHLIGHT_MEANINGS.items()
    )
    return "\n".join(lines)


class HelpScreen(ModalScreen[None]):
    """Modal help overlay."""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss_help", "Close"),
        ("question_mark", "dismiss_help", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    HelpScreen > Center > Middle > Static {
        width: 50;
        padding: 2 4;
        background: $surface;
        border: tall $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Create the help content."""
        text = (
            f"{_KEYS_HELP}\n{_legend()}\n\n"
            "Press [bold]?[/bold] or [bold]Escape[/bold] to dismiss."
        )
        with Center(), Middle():
            yield Static(text, markup=True)

    def action_dismiss_help(self) -> None:
        """Dismiss the help screen."""
        self.dismiss(None)
