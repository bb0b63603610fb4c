"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ai_highlight.codes import HIGHLIGHT_MEANINGS, VALID_CODES, Mode
from ai_highlight.config import ConfigError, Settings, get_config_path, load_settings
from ai_highlight.palettes import DEFAULT_PALETTE
from ai_highlight.parser import extract_codes, render
from ai_highlight.renderer import highlight_renderer, highlight_span
from ai_highlight.sanitizer import sanitize, strip_codes

logger = logging.getLogger(__name__)


def _read_input(source: str | None) -> str:
    """Read the annotated text from a file, or stdin for ``-`` / no argument."""
    if source is None or source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read {source}: {e}", file=sys.stderr)
        sys.exit(1)


def _load_settings() -> Settings:
    path = get_config_path()
    try:
        return load_settings(path)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _cmd_render(args: argparse.Namespace, settings: Settings) -> None:
    """Render highlight codes to HTML."""
    text = _read_input(args.file)
    mode = Mode(args.mode) if args.mode else settings.mode
    palette = settings.get_palette(args.palette)
    if args.wrap == "div":
        html = highlight_renderer(text, mode, palette, class_name=args.class_name)
    elif args.wrap == "span":
        html = highlight_span(text, mode, palette, class_name=args.class_name)
    else:
        html = render(text, mode, palette)
    print(html)


def _cmd_sanitize(args: argparse.Namespace, _settings: Settings) -> None:
    """Print the input with invented and orphaned tags removed."""
    print(sanitize(_read_input(args.file)))


def _cmd_strip(args: argparse.Namespace, _settings: Settings) -> None:
    """Print the input with every highlight code removed."""
    print(strip_codes(sanitize(_read_input(args.file))))


def _cmd_codes(args: argparse.Namespace, _settings: Settings) -> None:
    """List the highlight codes used in the input."""
    found = extract_codes(_read_input(args.file))
    # Report in canonical order rather than set order
    codes = [code for code in VALID_CODES if code in found]
    if args.json:
        print(json.dumps({code.value: HIGHLIGHT_MEANINGS[code] for code in codes}, indent=2))
        return
    if not codes:
        print("No highlight codes found.")
        return
    for code in codes:
        print(f"{code:<3} {HIGHLIGHT_MEANINGS[code]}")


def _cmd_palettes(args: argparse.Namespace, settings: Settings) -> None:
    """List available palettes and their colours."""
    if args.json:
        print(
            json.dumps(
                {
                    name: {
                        "background": {str(k): v for k, v in palette.background.items()},
                        "underline": {str(k): v for k, v in palette.underline.items()},
                    }
                    for name, palette in settings.palettes.items()
                },
                indent=2,
            )
        )
        return

    for name, palette in settings.palettes.items():
        marker = "*" if name == settings.palette else " "
        print(f"{marker} {name}")
        for code in VALID_CODES:
            print(
                f"    {code:<3} {palette.background.get(code, '-'):<8} "
                f"{palette.underline.get(code, '-'):<8} {HIGHLIGHT_MEANINGS[code]}"
            )


def _cmd_preview(args: argparse.Namespace, settings: Settings) -> None:
    """Launch the Textual preview.

    Imports are deferred to avoid loading Textual for the other commands.
    """
    from ai_highlight.tui.app import PreviewApp  # noqa: PLC0415

    text = _read_input(args.file)
    app = PreviewApp(text, settings, mode=args.mode, palette=args.palette)
    app.run()


def _add_style_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        help="Rendering mode (default: from config, else highlights)",
    )
    parser.add_argument("--palette", help="Palette name (default: from config, else vibrant)")


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="ai-highlight",
        description="Render [CODE]...[/CODE] semantic highlights in AI responses",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render highlights to HTML")
    render_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    _add_style_options(render_parser)
    render_parser.add_argument(
        "--wrap", choices=["div", "span"], help="Wrap the output in a container element"
    )
    render_parser.add_argument(
        "--class", dest="class_name", default="", help="CSS class for the container"
    )

    # sanitize
    sanitize_parser = subparsers.add_parser("sanitize", help="Remove invalid and orphaned tags")
    sanitize_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")

    # strip
    strip_parser = subparsers.add_parser("strip", help="Remove all highlight codes")
    strip_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")

    # codes
    codes_parser = subparsers.add_parser("codes", help="List highlight codes used in the input")
    codes_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    codes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # palettes
    palettes_parser = subparsers.add_parser("palettes", help="List available palettes")
    palettes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # preview
    preview_parser = subparsers.add_parser("preview", help="Preview highlights in the terminal")
    preview_parser.add_argument("file", help="Input file")
    _add_style_options(preview_parser)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return

    settings = _load_settings()
    palette_name = getattr(args, "palette", None)
    if palette_name is not None and palette_name not in settings.palettes:
        logger.warning("Unknown palette '%s', falling back to %s", palette_name, DEFAULT_PALETTE)

    dispatch = {
        "render": _cmd_render,
        "sanitize": _cmd_sanitize,
        "strip": _cmd_strip,
        "codes": _cmd_codes,
        "palettes": _cmd_palettes,
        "preview": _cmd_preview,
    }
    dispatch[args.command](args, settings)
