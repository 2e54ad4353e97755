"""CLI for flowtext - task text markup and structural editing."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .core.model import EditResult, TextSelection
from .editing.checkbox import checkbox_offsets, is_checkbox_at, toggle_checkbox_at
from .editing.lists import apply_newline
from .editing.suggest import active_query, filter_candidates, match
from .editing.wrap import HIGHLIGHT, STRIKETHROUGH, toggle_wrap
from .markup.hashtags import add_hashtag_to_text, extract_hashtags, remove_hashtags
from .markup.tokenizer import tokenize, tokenize_live
from .runtime import build_runtime, configure_logging

logger = logging.getLogger(__name__)


def _read_text(args: argparse.Namespace) -> str:
    """Text from the positional argument, or stdin when it is omitted."""
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def _emit(args: argparse.Namespace, data: Any, plain: str) -> None:
    if args.json:
        print(json.dumps(data, ensure_ascii=False))
    else:
        print(plain)


def _caret(args: argparse.Namespace, text: str) -> TextSelection:
    caret = len(text) if args.caret is None else args.caret
    return TextSelection.caret(caret).clamp(len(text))


def cmd_tokenize(args: argparse.Namespace, rt: Any) -> int:
    """Print the spans of a text."""
    text = _read_text(args)
    markup = rt.config.markup

    if args.live:
        spans = tokenize_live(text, recognize_images=markup.images)
    else:
        spans = tokenize(
            text,
            recognize_hashtags=markup.hashtags and not args.no_hashtags,
            recognize_emphasis=markup.emphasis and not args.no_emphasis,
        )

    lines = [f"{s.kind.value}\t{s.start}\t{s.end}\t{s.text!r}" for s in spans]
    _emit(args, [s.as_dict() for s in spans], "\n".join(lines))
    return 0


def cmd_tags(args: argparse.Namespace, rt: Any) -> int:
    """Print hashtag list paths, one per line."""
    tags = extract_hashtags(_read_text(args))
    _emit(args, tags, "\n".join(tags))
    return 0


def cmd_strip(args: argparse.Namespace, rt: Any) -> int:
    """Print text with all hashtags removed."""
    text = remove_hashtags(_read_text(args))
    _emit(args, {"text": text}, text)
    return 0


def cmd_tag(args: argparse.Namespace, rt: Any) -> int:
    """Prepend a hashtag unless already present."""
    text = add_hashtag_to_text(_read_text(args), args.list_path)
    _emit(args, {"text": text}, text)
    return 0


def cmd_newline(args: argparse.Namespace, rt: Any) -> int:
    """Simulate pressing Enter at the caret."""
    text = _read_text(args)
    selection = _caret(args, text)
    result = apply_newline(text, selection)

    handled = result is not None
    if result is None:
        # No list prefix: a plain newline, as the editor would insert
        caret = selection.start
        result = EditResult(text[:caret] + "\n" + text[caret:], TextSelection.caret(caret + 1))

    _emit(args, {"handled": handled, **result.as_dict()}, result.text)
    return 0


def cmd_wrap(args: argparse.Namespace, rt: Any) -> int:
    """Toggle a marker pair around a selection."""
    text = _read_text(args)
    editing = rt.config.editing
    markers = {
        "bold": editing.bold_marker,
        "italic": editing.italic_marker,
        "strikethrough": STRIKETHROUGH,
        "highlight": HIGHLIGHT,
    }

    if args.before:
        before, after = args.before, args.after or args.before
    else:
        before = after = markers[args.style]

    end = args.start if args.end is None else args.end
    selection = TextSelection(args.start, end).clamp(len(text))
    result = toggle_wrap(text, selection, before, after)
    _emit(args, result.as_dict(), result.text)
    return 0


def cmd_checkbox(args: argparse.Namespace, rt: Any) -> int:
    """Toggle a checkbox (by offset, or the first one in the text)."""
    text = _read_text(args)

    offset = args.offset
    if offset is None:
        offsets = checkbox_offsets(text)
        if not offsets:
            print("Error: no checkbox found", file=sys.stderr)
            return 1
        offset = offsets[0]
    elif not is_checkbox_at(text, offset):
        print(f"Error: no checkbox at offset {offset}", file=sys.stderr)
        return 1

    result = toggle_checkbox_at(text, offset)
    _emit(args, {"text": result, "offset": offset}, result)
    return 0


def cmd_suggest(args: argparse.Namespace, rt: Any) -> int:
    """Show hashtag suggestions for the query typed before the caret."""
    text = _read_text(args)
    query = active_query(text, _caret(args, text))

    if query is None:
        _emit(args, {"active": False}, "No active hashtag query")
        return 0

    candidates = rt.lists.lists()
    limit = args.limit if args.limit is not None else rt.config.suggest.limit
    result = match(query.query, candidates)
    suggestions = filter_candidates(query.query, candidates, limit)

    if args.json:
        _emit(
            args,
            {
                "active": True,
                "query": query.query,
                "has_exact_match": result.has_exact_match,
                "show_create_option": result.show_create_option,
                "suggestions": [c.as_dict() for c in suggestions],
            },
            "",
        )
        return 0

    print(f"Query: #{query.query}")
    for c in suggestions:
        print(f"{c.hashtag}\t{c.task_count}")
    if result.show_create_option:
        print(f"+ Create #{query.query}")
    return 0


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install flowtext[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    # Determine token
    token_arg = getattr(args, 'token', 'auto')
    token = None

    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == 'none':
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=args.cors)

    # CLI flags override config
    host = args.host or rt.config.api.host
    port = args.port or rt.config.api.port

    print(f"Starting server on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")

    return 0


class _VersionAction(argparse.Action):
    def __init__(self, option_strings: list[str], dest: str = argparse.SUPPRESS, **kwargs: Any):
        super().__init__(option_strings, dest=dest, nargs=0, **kwargs)

    def __call__(self, parser: argparse.ArgumentParser, namespace: Any, values: Any,
                 option_string: str | None = None) -> None:
        print(f"flowtext {__version__}")
        print(f"python {platform.python_version()}")
        print(f"platform {platform.platform()}")
        parser.exit()


def _add_text_arg(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("text", nargs="?", help="Input text (default: read stdin)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flowtext", description="Task text markup and structural editing"
    )
    parser.add_argument("--version", action=_VersionAction, help="Show version information")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: cwd/flowtext.toml)",
    )
    parser.add_argument(
        "--lists",
        type=Path,
        default=None,
        help="JSON/YAML file of task lists for suggestions (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # tokenize command
    parser_tokenize = subparsers.add_parser("tokenize", help="Print typed spans")
    _add_text_arg(parser_tokenize)
    parser_tokenize.add_argument(
        "--live", action="store_true", help="Editing-surface spans (markers kept)"
    )
    parser_tokenize.add_argument(
        "--no-hashtags", dest="no_hashtags", action="store_true", help="Leave hashtags plain"
    )
    parser_tokenize.add_argument(
        "--no-emphasis", dest="no_emphasis", action="store_true", help="Leave bold/italic plain"
    )

    # tags command
    parser_tags = subparsers.add_parser("tags", help="Extract hashtag list paths")
    _add_text_arg(parser_tags)

    # strip command
    parser_strip = subparsers.add_parser("strip", help="Remove all hashtags")
    _add_text_arg(parser_strip)

    # tag command
    parser_tag = subparsers.add_parser("tag", help="Add a hashtag if missing")
    parser_tag.add_argument("list_path", help="List path, e.g. Work/Projects")
    _add_text_arg(parser_tag)

    # newline command
    parser_newline = subparsers.add_parser("newline", help="Press Enter at the caret")
    _add_text_arg(parser_newline)
    parser_newline.add_argument("--caret", type=int, help="Caret offset (default: end)")

    # wrap command
    parser_wrap = subparsers.add_parser("wrap", help="Toggle markers around a selection")
    _add_text_arg(parser_wrap)
    parser_wrap.add_argument("--start", type=int, required=True, help="Selection start")
    parser_wrap.add_argument("--end", type=int, help="Selection end (default: start)")
    parser_wrap.add_argument(
        "--style", choices=["bold", "italic", "strikethrough", "highlight"], default="bold",
        help="Marker style (default: bold)"
    )
    parser_wrap.add_argument("--before", help="Explicit opening marker")
    parser_wrap.add_argument("--after", help="Explicit closing marker (default: --before)")

    # checkbox command
    parser_checkbox = subparsers.add_parser("checkbox", help="Toggle a checkbox")
    _add_text_arg(parser_checkbox)
    parser_checkbox.add_argument(
        "--offset", type=int, help="Offset of the '- [ ]' token (default: first checkbox)"
    )

    # suggest command
    parser_suggest = subparsers.add_parser("suggest", help="Hashtag suggestions at the caret")
    _add_text_arg(parser_suggest)
    parser_suggest.add_argument("--caret", type=int, help="Caret offset (default: end)")
    parser_suggest.add_argument("--limit", type=int, help="Maximum suggestions")

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default=None, help="Host to bind to (default: config or 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=None, help="Port to bind to (default: config or 8765)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        rt = build_runtime(config_path=args.config, lists_path=args.lists)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(rt.config.logging.level, verbose=args.verbose)

    # Dispatch to command handlers
    handlers = {
        "tokenize": cmd_tokenize,
        "tags": cmd_tags,
        "strip": cmd_strip,
        "tag": cmd_tag,
        "newline": cmd_newline,
        "wrap": cmd_wrap,
        "checkbox": cmd_checkbox,
        "suggest": cmd_suggest,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            logger.debug("Command %s failed", args.cmd, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
