"""Tests for tokenization, nesting resolution and render()."""

from __future__ import annotations

import re

import pytest

from ai_highlight.codes import HighlightCode, Mode
from ai_highlight.palettes import PALETTES, Palette
from ai_highlight.parser import (
    Token,
    TokenKind,
    extract_codes,
    has_codes,
    render,
    resolve,
    tokenize,
)
from ai_highlight.sanitizer import sanitize, strip_codes
from tests.conftest import SAMPLE_RESPONSE, TRICKY_TEXTS

ALL_MODES = list(Mode)


def _tag_wrap(content: str, code: HighlightCode) -> str:
    """Readable stand-in for the HTML emitter."""
    return f"<{code}>{content}</{code}>"


# === tokenize() ===


def test_tokenize_splits_tags_and_text() -> None:
    assert tokenize("a[Y]b[/Y]") == [
        Token(TokenKind.TEXT, "a"),
        Token(TokenKind.OPEN, "[Y]", HighlightCode.Y),
        Token(TokenKind.TEXT, "b"),
        Token(TokenKind.CLOSE, "[/Y]", HighlightCode.Y),
    ]


def test_tokenize_distinguishes_g_and_gr() -> None:
    tokens = tokenize("[GR]x[/GR][G]y[/G]")
    assert [t.code for t in tokens if t.kind is not TokenKind.TEXT] == [
        HighlightCode.GR,
        HighlightCode.GR,
        HighlightCode.G,
        HighlightCode.G,
    ]


def test_tokenize_keeps_unknown_tags_as_text() -> None:
    assert tokenize("[Z]x[/Z]") == [Token(TokenKind.TEXT, "[Z]x[/Z]")]


def test_tokenize_empty() -> None:
    assert tokenize("") == []


# === resolve() ===


def test_resolve_interleaved_codes() -> None:
    """Closing Y matches the Y frame even though B was opened after it."""
    result = resolve(tokenize("[Y]a[B]b[/Y]c[/B]"), _tag_wrap)
    assert result == "<Y>ab</Y><B>c</B>"
    assert re.sub(r"</?[A-Z]+>", "", result) == "abc"
    assert len(re.findall(r"<[A-Z]+>", result)) == 2


def test_resolve_same_code_nesting() -> None:
    result = resolve(tokenize("[Y]a[Y]b[/Y]c[/Y]"), _tag_wrap)
    assert result == "<Y>a<Y>b</Y>c</Y>"


def test_resolve_properly_nested_different_codes() -> None:
    result = resolve(tokenize("[Y]a [B]b[/B] c[/Y]"), _tag_wrap)
    assert result == "<Y>a <B>b</B> c</Y>"


def test_resolve_drops_unmatched_close() -> None:
    assert resolve(tokenize("a[/Y]b"), _tag_wrap) == "ab"


def test_resolve_unmatched_open_vanishes() -> None:
    assert resolve(tokenize("[B]a"), _tag_wrap) == "a"


def test_resolve_applies_text_transform_to_plain_runs_only() -> None:
    result = resolve(tokenize("x[Y]y[/Y]"), _tag_wrap, str.upper)
    assert result == "X<Y>Y</Y>"


# === render() ===


def test_render_highlights_vibrant() -> None:
    assert render("[Y]important[/Y]", "highlights", "vibrant") == (
        '<span style="background-color:#FFF4C3;padding:1px 3px 0 3px;'
        'border-radius:3px;display:inline">important</span>'
    )


def test_render_both_has_background_and_underline() -> None:
    result = render("[Y]important[/Y]", Mode.BOTH, "vibrant")
    assert result.count("<span") == 1
    assert "background-color:#FFF4C3" in result
    assert "text-decoration:underline #FFC41A" in result


def test_render_underline_has_no_background() -> None:
    result = render("[Y]important[/Y]", Mode.UNDERLINE)
    assert "text-decoration:underline #FFC41A" in result
    assert "background-color" not in result


def test_render_defaults() -> None:
    assert render("[Y]x[/Y]") == render("[Y]x[/Y]", Mode.HIGHLIGHTS, "vibrant")


def test_render_orphan_open_is_removed() -> None:
    assert render("[Y]only open, no close", "highlights") == "only open, no close"


@pytest.mark.parametrize("mode", ALL_MODES)
def test_render_unknown_code_passthrough(mode: Mode) -> None:
    assert render("[Z]text[/Z]", mode) == "[Z]text[/Z]"


@pytest.mark.parametrize("mode", ALL_MODES)
def test_render_plain_text_unchanged(mode: Mode) -> None:
    assert render("just some text", mode) == "just some text"


def test_render_applies_markdown() -> None:
    assert render("**bold** [Y]x[/Y]").startswith("<strong>bold</strong> <span")


def test_render_empty_string() -> None:
    assert render("") == ""


@pytest.mark.parametrize("palette", list(PALETTES))
@pytest.mark.parametrize("text", TRICKY_TEXTS)
def test_render_none_equals_strip_of_sanitize(text: str, palette: str) -> None:
    assert render(text, Mode.NONE, palette) == strip_codes(sanitize(text))


@pytest.mark.parametrize("mode", ALL_MODES)
def test_render_fenced_code_is_verbatim(mode: Mode) -> None:
    block = "```\n[Y]code[/Y] **x** `y`\n```"
    result = render(f"Intro [Y]hi[/Y]\n{block}\nOutro [Y]open", mode)
    assert block in result
    assert result.endswith("Outro open")


@pytest.mark.parametrize("mode", [Mode.HIGHLIGHTS, Mode.UNDERLINE, Mode.BOTH])
def test_render_without_codes_has_no_spans(mode: Mode) -> None:
    text = "no codes here, just [brackets] and *stars*"
    assert not has_codes(text)
    assert "<span" not in render(text, mode)


def test_render_interleaved_codes_after_sanitizing() -> None:
    """The Y pair contains '[' so the sanitizer drops it; only B survives."""
    result = render("[Y]a[B]b[/Y]c[/B]")
    assert result.count("<span") == 1
    assert result.startswith("a<span")
    assert result.endswith(">bc</span>")


def test_render_with_partial_palette_uses_fallback_colors() -> None:
    partial = Palette(
        name="partial",
        background={HighlightCode.Y: "#111111"},
        underline={HighlightCode.O: "#222222"},
    )
    result = render("[B]x[/B]", "both", partial)
    assert "background-color:#111111" in result
    assert "text-decoration:underline #222222" in result


def test_render_unknown_palette_falls_back_to_vibrant() -> None:
    assert render("[Y]x[/Y]", palette="missing") == render("[Y]x[/Y]", palette="vibrant")


def test_render_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError, match="sparkle"):
        render("x", "sparkle")


def test_render_sample_response() -> None:
    result = render(SAMPLE_RESPONSE, Mode.BOTH, "natural")
    assert result.count("<span") == 3  # Y, B, R
    assert "<strong>bold</strong>" in result
    assert "<em>italic</em>" in result
    assert 'print("[Y]not a highlight[/Y]")' in result
    assert "[Z]unknown codes[/Z]" in result


# === has_codes() / extract_codes() ===


def test_has_codes() -> None:
    assert has_codes("[Y]x")
    assert has_codes("[GR]x[/GR]")
    assert not has_codes("[/Y]")
    assert not has_codes("[Z]x[/Z]")
    assert not has_codes("")


def test_extract_codes() -> None:
    assert extract_codes("[Y]a[/Y][B]b[/B][Y]c[/Y]") == {HighlightCode.Y, HighlightCode.B}
    assert extract_codes("nothing") == set()


def test_render_does_not_duplicate_code_blocks_for_forged_placeholders() -> None:
    assert render("```x``` and \x00CODE0\x00") == "```x``` and CODE0"
