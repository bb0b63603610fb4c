"""Pre-processing of raw model output before highlight parsing.

Three passes run in a fixed order:

1. Fenced code blocks are swapped for placeholders so nothing below
   touches them.
2. Invented full-word codes (``[GREEN]...[/GREEN]``) are unwrapped.
3. For each valid code independently, well-formed pairs are protected and
   every remaining lone ``[CODE]`` / ``[/CODE]`` is deleted.

A "well-formed pair" is an opening tag, content without any ``[``, and a
closing tag of the same code. Anything else involving that code is an
orphan.
"""

from __future__ import annotations

import logging
import re

from ai_highlight.codes import INVENTED_CODES, VALID_CODES, HighlightCode

logger = logging.getLogger(__name__)

CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")

# NUL-delimited so placeholders never collide with model output or with
# the markdown and tag patterns applied while they are in place.
_PLACEHOLDER_RE = re.compile(r"\x00([A-Z]+)(\d+)\x00")
_CODE_BLOCK_KIND = "CODE"

_INVENTED_PAIR_RES = [
    re.compile(rf"\[{word}\]([^\[]*)\[/{word}\]", re.IGNORECASE) for word in INVENTED_CODES
]


def _pair_re(code: HighlightCode) -> re.Pattern[str]:
    return re.compile(rf"\[{code}\]([^\[]*)\[/{code}\]")


_PAIR_RES: dict[HighlightCode, re.Pattern[str]] = {code: _pair_re(code) for code in VALID_CODES}
_LONE_TAG_RES: dict[HighlightCode, re.Pattern[str]] = {
    code: re.compile(rf"\[/?{code}\]") for code in VALID_CODES
}


def _protect(text: str, pattern: re.Pattern[str], kind: str) -> tuple[str, list[str]]:
    """Replace every match of ``pattern`` with a numbered placeholder."""
    saved: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        saved.append(match.group(0))
        return f"\x00{kind}{len(saved) - 1}\x00"

    return pattern.sub(_stash, text), saved


def _restore(text: str, kind: str, saved: list[str]) -> str:
    """Put back what ``_protect`` stashed, leaving foreign placeholders alone."""
    if not saved:
        return text

    def _unstash(match: re.Match[str]) -> str:
        index = int(match.group(2))
        if match.group(1) == kind and index < len(saved):
            return saved[index]
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_unstash, text)


def protect_code_blocks(text: str) -> tuple[str, list[str]]:
    """Swap fenced code blocks for placeholders; return the text and the blocks.

    NUL characters are dropped first so the input cannot forge a placeholder.
    """
    return _protect(text.replace("\x00", ""), CODE_BLOCK_RE, _CODE_BLOCK_KIND)


def restore_code_blocks(text: str, blocks: list[str]) -> str:
    """Inverse of :func:`protect_code_blocks`."""
    return _restore(text, _CODE_BLOCK_KIND, blocks)


def remove_invented_codes(text: str) -> str:
    """Unwrap ``[GREEN]x[/GREEN]`` style pairs, keeping ``x``."""
    for pattern in _INVENTED_PAIR_RES:
        text = pattern.sub(r"\1", text)
    return text


def remove_orphan_tags(text: str, code: HighlightCode) -> str:
    """Delete unmatched ``[code]`` / ``[/code]`` markers, keeping valid pairs."""
    protected, pairs = _protect(text, _PAIR_RES[code], code)
    cleaned, removed = _LONE_TAG_RES[code].subn("", protected)
    if removed:
        logger.debug("Removed %d orphan %s tag(s)", removed, code)
    return _restore(cleaned, code, pairs)


def clean(text: str) -> str:
    """Run the invented-code and orphan passes on already protected text."""
    text = remove_invented_codes(text)
    for code in VALID_CODES:
        text = remove_orphan_tags(text, code)
    return text


def sanitize(text: str) -> str:
    """Return ``text`` with invented codes unwrapped and orphan tags removed.

    Fenced code blocks come back verbatim.
    """
    if not text:
        return text
    protected, blocks = protect_code_blocks(text)
    return restore_code_blocks(clean(protected), blocks)


def strip_codes(text: str) -> str:
    """Remove every valid code pair, keeping the content.

    Pairs are unwrapped innermost first until nothing changes, so nested
    pairs disappear too and applying this twice is the same as once.
    Fenced code blocks are left untouched.
    """
    if not text:
        return text
    protected, blocks = protect_code_blocks(text)
    changed = True
    while changed:
        changed = False
        for code in VALID_CODES:
            protected, count = _PAIR_RES[code].subn(r"\1", protected)
            changed = changed or count > 0
    return restore_code_blocks(protected, blocks)
