"""Colour palettes: background and underline colour per highlight code."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal, TypeAlias

from ai_highlight.codes import HighlightCode

if TYPE_CHECKING:
    from collections.abc import Mapping

ColorKind: TypeAlias = Literal["background", "underline"]

DEFAULT_PALETTE = "vibrant"

# Used when a palette has no entry for the requested code.
BACKGROUND_FALLBACK_CODE = HighlightCode.Y
UNDERLINE_FALLBACK_CODE = HighlightCode.O


@dataclass(frozen=True)
class Palette:
    """A named pair of code -> colour tables."""

    name: str
    background: Mapping[HighlightCode, str]
    underline: Mapping[HighlightCode, str]


def _table(colors: dict[HighlightCode, str]) -> Mapping[HighlightCode, str]:
    return MappingProxyType(colors)


# Bright, saturated colours
VIBRANT = Palette(
    name="vibrant",
    background=_table(
        {
            HighlightCode.Y: "#FFF4C3",
            HighlightCode.B: "#D5FEFF",
            HighlightCode.O: "#FFD5C3",
            HighlightCode.G: "#DCFCE7",
            HighlightCode.R: "#fee2e2",
            HighlightCode.P: "#FEECFF",
            HighlightCode.L: "#E6F3FF",
            HighlightCode.GR: "#E8E6E5",
            HighlightCode.H: "#ede9fe",
            HighlightCode.BR: "#f5e8dd",
        }
    ),
    underline=_table(
        {
            HighlightCode.Y: "#FFC41A",
            HighlightCode.B: "#5DCFFF",
            HighlightCode.O: "#FF7744",
            HighlightCode.G: "#22C55E",
            HighlightCode.R: "#ef4444",
            HighlightCode.P: "#FC90FF",
            HighlightCode.L: "#8DC5FF",
            HighlightCode.GR: "#ACA8A4",
            HighlightCode.H: "#8b5cf6",
            HighlightCode.BR: "#92400e",
        }
    ),
)

# Earth tones, muted colours
NATURAL = Palette(
    name="natural",
    background=_table(
        {
            HighlightCode.Y: "#F5F0E8",
            HighlightCode.B: "#E8F0F4",
            HighlightCode.O: "#F5E8DD",
            HighlightCode.G: "#E8EDE6",
            HighlightCode.R: "#F5E8EA",
            HighlightCode.P: "#F0EAF5",
            HighlightCode.L: "#E6EEF3",
            HighlightCode.GR: "#E8E6E5",
            HighlightCode.H: "#EAE8F0",
            HighlightCode.BR: "#F0E8E0",
        }
    ),
    underline=_table(
        {
            HighlightCode.Y: "#9A8B7A",
            HighlightCode.B: "#2C5F6F",
            HighlightCode.O: "#92400E",
            HighlightCode.G: "#6B7056",
            HighlightCode.R: "#7C2D3F",
            HighlightCode.P: "#9B8BA8",
            HighlightCode.L: "#5C7B8B",
            HighlightCode.GR: "#ACA8A4",
            HighlightCode.H: "#7C6B8A",
            HighlightCode.BR: "#8B6B47",
        }
    ),
)

PALETTES: Mapping[str, Palette] = MappingProxyType({"vibrant": VIBRANT, "natural": NATURAL})


def get_palette(name: str | Palette = DEFAULT_PALETTE) -> Palette:
    """Return a palette by name, falling back to the default for unknown names.

    A ``Palette`` instance is returned as-is so callers can pass palettes
    that were built at runtime (e.g. from the config file).
    """
    if isinstance(name, Palette):
        return name
    return PALETTES.get(name, PALETTES[DEFAULT_PALETTE])


def get_color(palette: str | Palette, code: HighlightCode | str, kind: ColorKind) -> str:
    """Look up one colour, falling back to Y (background) or O (underline)."""
    colors = get_palette(palette)
    if kind == "background":
        table, fallback = colors.background, BACKGROUND_FALLBACK_CODE
    else:
        table, fallback = colors.underline, UNDERLINE_FALLBACK_CODE
    color = table.get(code) or table.get(fallback)
    if color is None:
        # Incomplete custom palette without the fallback entry either
        default_table = VIBRANT.background if kind == "background" else VIBRANT.underline
        color = default_table[fallback]
    return color


def get_background_color(palette: str | Palette, code: HighlightCode | str) -> str:
    """Return the background colour for ``code``."""
    return get_color(palette, code, "background")


def get_underline_color(palette: str | Palette, code: HighlightCode | str) -> str:
    """Return the underline colour for ``code``."""
    return get_color(palette, code, "underline")
