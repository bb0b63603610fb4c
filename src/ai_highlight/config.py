"""User configuration: load and validate config.toml."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ai_highlight.codes import HighlightCode, Mode
from ai_highlight.palettes import DEFAULT_PALETTE, PALETTES, Palette

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when config.toml is malformed or refers to unknown modes/palettes/codes."""


@dataclass
class Settings:
    """Defaults for the CLI and preview, plus any user-defined palettes."""

    mode: Mode = Mode.HIGHLIGHTS
    palette: str = DEFAULT_PALETTE
    palettes: dict[str, Palette] = field(default_factory=lambda: dict(PALETTES))

    def get_palette(self, name: str | None = None) -> Palette:
        """Return the named palette (default: the configured one)."""
        return self.palettes.get(name or self.palette, self.palettes[DEFAULT_PALETTE])


def get_config_path() -> Path:
    """Return the path to config.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "ai-highlight" / "config.toml"


def _color_table(
    raw: Any,  # noqa: ANN401
    base: dict[HighlightCode, str],
    where: str,
) -> dict[HighlightCode, str]:
    """Layer ``raw`` (code -> colour) over ``base``."""
    if raw is None:
        return dict(base)
    if not isinstance(raw, dict):
        msg = f"{where} must be a table of code = colour"
        raise ConfigError(msg)
    table = dict(base)
    for code, color in raw.items():
        if code not in HighlightCode.__members__:
            msg = f"{where} has unknown highlight code '{code}'"
            raise ConfigError(msg)
        if not isinstance(color, str):
            msg = f"{where}.{code} must be a colour string, got {color!r}"
            raise ConfigError(msg)
        table[HighlightCode(code)] = color
    return table


def _parse_palette(name: str, entry: Any, path: Path) -> Palette:  # noqa: ANN401
    where = f"[palettes.{name}] in {path}"
    if not isinstance(entry, dict):
        msg = f"{where} must be a table"
        raise ConfigError(msg)
    extends = entry.get("extends", DEFAULT_PALETTE)
    if extends not in PALETTES:
        msg = f"{where} extends unknown palette '{extends}'"
        raise ConfigError(msg)
    base = PALETTES[extends]
    return Palette(
        name=name,
        background=MappingProxyType(
            _color_table(entry.get("background"), dict(base.background), f"{where} background")
        ),
        underline=MappingProxyType(
            _color_table(entry.get("underline"), dict(base.underline), f"{where} underline")
        ),
    )


def load_settings(path: Path) -> Settings:
    """Load and validate settings from a TOML file.

    Returns defaults if the file does not exist.
    Raises ConfigError on parse errors or invalid values.
    """
    if not path.exists():
        return Settings()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    raw_palettes = data.get("palettes", {})
    if not isinstance(raw_palettes, dict):
        msg = f"[palettes] in {path} must be a table"
        raise ConfigError(msg)

    palettes = dict(PALETTES)
    for name, entry in raw_palettes.items():
        if name in PALETTES:
            msg = f"Palette '{name}' in {path} would replace a built-in palette"
            raise ConfigError(msg)
        palettes[name] = _parse_palette(name, entry, path)

    raw_mode = data.get("mode", Mode.HIGHLIGHTS.value)
    try:
        mode = Mode(raw_mode)
    except ValueError as e:
        choices = ", ".join(m.value for m in Mode)
        msg = f"Unknown mode '{raw_mode}' in {path} (expected one of: {choices})"
        raise ConfigError(msg) from e

    palette = data.get("palette", DEFAULT_PALETTE)
    if not isinstance(palette, str) or palette not in palettes:
        msg = f"Unknown palette '{palette}' in {path}"
        raise ConfigError(msg)

    logger.debug(
        "Loaded settings from %s (%d custom palette(s))", path, len(palettes) - len(PALETTES)
    )
    return Settings(mode=mode, palette=palette, palettes=palettes)
