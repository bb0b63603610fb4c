"""Shared fixtures: sample model responses and an isolated config directory."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_RESPONSE = textwrap.dedent("""\
    The [Y]key point[/Y] is that [B]a monad[/B] is just a pattern.
    [R]Careful:[/R] **bold** and *italic* still work, as does `inline code`.
    [GREEN]invented[/GREEN] codes are unwrapped, [O]orphans vanish and
    [Z]unknown codes[/Z] are left alone.
    ```python
    print("[Y]not a highlight[/Y]")
    ```
    """)

# Texts exercising nesting, orphans and code blocks together.
TRICKY_TEXTS = [
    "",
    "plain text",
    "[Y]important[/Y]",
    "[Y]only open, no close",
    "[Y]a[B]b[/Y]c[/B]",
    "[Y]a[Y]b[/Y]c[/Y]",
    "[Y][B]x[/B][/Y]",
    "[G]x[/G] [GR]y[/GR] [GR]z",
    "[Z]text[/Z]",
    "```\n[Y]code[/Y]\n```\n[Y]open",
    "C:\\`dir`",
    "a\\**b**",
    "```x``` and \x00CODE0\x00",
    SAMPLE_RESPONSE,
]


@pytest.fixture
def config_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point XDG_CONFIG_HOME at a temp dir and return the config.toml path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    config_dir = tmp_path / "ai-highlight"
    config_dir.mkdir()
    return config_dir / "config.toml"
