"""Highlight codes and rendering modes."""

from __future__ import annotations

from enum import StrEnum


class HighlightCode(StrEnum):
    """Short bracket identifiers, e.g. ``[Y]`` ... ``[/Y]``."""

    Y = "Y"  # yellow
    B = "B"  # blue
    O = "O"  # orange  # noqa: E741
    G = "G"  # green
    R = "R"  # red
    P = "P"  # pink
    L = "L"  # light blue
    GR = "GR"  # gray
    H = "H"  # purple
    BR = "BR"  # brown


class Mode(StrEnum):
    """How a highlighted span is styled."""

    HIGHLIGHTS = "highlights"
    UNDERLINE = "underline"
    BOTH = "both"
    NONE = "none"


VALID_CODES: tuple[HighlightCode, ...] = tuple(HighlightCode)

# Full colour words models sometimes invent instead of the short codes.
INVENTED_CODES = ("GREEN", "RED", "BLUE", "YELLOW", "ORANGE", "PURPLE")

HIGHLIGHT_MEANINGS: dict[HighlightCode, str] = {
    HighlightCode.Y: "Important/Key points",
    HighlightCode.B: "Concepts/Definitions",
    HighlightCode.O: "Steps/Sequences",
    HighlightCode.G: "Success/Positive",
    HighlightCode.R: "Warnings/Errors",
    HighlightCode.P: "Examples",
    HighlightCode.L: "Data/Numbers",
    HighlightCode.GR: "Code/Technical",
    HighlightCode.H: "Emphasis/Highlights",
    HighlightCode.BR: "Context/Background",
}
