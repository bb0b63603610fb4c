"""Highlight parser: tokenize ``[CODE]...[/CODE]`` markup and resolve it to HTML.

Closing tags match the most recently opened tag *of the same code*, which
is not necessarily the top of the stack. Different codes may therefore
overlap and each still resolves to its own span.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ai_highlight.codes import VALID_CODES, HighlightCode, Mode
from ai_highlight.markdown import apply_markdown
from ai_highlight.palettes import DEFAULT_PALETTE, Palette, get_palette
from ai_highlight.sanitizer import (
    clean,
    protect_code_blocks,
    restore_code_blocks,
    sanitize,
    strip_codes,
)
from ai_highlight.styles import wrap

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

_CODE_ALTERNATION = "|".join(VALID_CODES)
OPEN_TAG_RE = re.compile(rf"\[({_CODE_ALTERNATION})\]")
TAG_SPLIT_RE = re.compile(rf"(\[/?(?:{_CODE_ALTERNATION})\])")
_TAG_RE = re.compile(rf"\[(/?)({_CODE_ALTERNATION})\]")


class TokenKind(Enum):
    OPEN = "open"
    CLOSE = "close"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    """One tag or one run of plain text."""

    kind: TokenKind
    value: str
    code: HighlightCode | None = None


@dataclass
class _OpenTag:
    code: HighlightCode
    start: int  # len(output) when the tag was seen


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tag tokens and plain-text runs, in order."""
    tokens: list[Token] = []
    for part in TAG_SPLIT_RE.split(text):
        if not part:
            continue
        match = _TAG_RE.fullmatch(part)
        if match is None:
            tokens.append(Token(TokenKind.TEXT, part))
        else:
            kind = TokenKind.CLOSE if match.group(1) else TokenKind.OPEN
            tokens.append(Token(kind, part, HighlightCode(match.group(2))))
    return tokens


def resolve(
    tokens: Iterable[Token],
    wrap_span: Callable[[str, HighlightCode], str],
    text: Callable[[str], str] | None = None,
) -> str:
    """Resolve tag tokens into styled spans.

    ``wrap_span(content, code)`` styles a resolved span; ``text``, if
    given, transforms each plain-text run before it is emitted. Unmatched
    closing tags are dropped and unmatched opening tags never produce
    output.
    """
    output: list[str] = []
    stack: list[_OpenTag] = []

    for token in tokens:
        if token.kind is TokenKind.TEXT or token.code is None:
            output.append(text(token.value) if text is not None else token.value)
            continue

        if token.kind is TokenKind.OPEN:
            stack.append(_OpenTag(token.code, len(output)))
            continue

        for j in range(len(stack) - 1, -1, -1):
            if stack[j].code == token.code:
                start = stack.pop(j).start
                content = "".join(output[start:])
                del output[start:]
                output.append(wrap_span(content, token.code))
                break
        else:
            logger.debug("Dropping unmatched closing tag %s", token.value)

    if stack:
        logger.debug("Unresolved opening tags: %s", ", ".join(tag.code for tag in stack))
    return "".join(output)


def render(
    text: str,
    mode: Mode | str = Mode.HIGHLIGHTS,
    palette: str | Palette = DEFAULT_PALETTE,
) -> str:
    """Convert highlight-annotated text to an HTML fragment.

    The input is trusted: nothing is HTML-escaped.
    """
    mode = Mode(mode)
    if not text:
        return text
    if mode is Mode.NONE:
        return strip_codes(sanitize(text))

    protected, blocks = protect_code_blocks(text)
    processed = apply_markdown(clean(protected))

    if has_codes(processed):
        colors = get_palette(palette)
        processed = resolve(
            tokenize(processed),
            lambda content, code: wrap(content, code, mode, colors),
        )

    return restore_code_blocks(processed, blocks)


def has_codes(text: str) -> bool:
    """Return True if any valid opening tag appears in ``text``."""
    return OPEN_TAG_RE.search(text) is not None


def extract_codes(text: str) -> set[HighlightCode]:
    """Return the distinct codes whose opening tag appears in ``text``."""
    return {HighlightCode(code) for code in OPEN_TAG_RE.findall(text)}
