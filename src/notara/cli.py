"""CLI for notara - renders notes in the Notara markdown dialect to HTML."""

import argparse
import json
import logging
import platform
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from . import __version__
from .core.model import RenderResult
from .errors import NotaraError
from .runtime import build_runtime


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise NotaraError(f"File {source} not found")
    return path.read_text(encoding="utf-8")


def _emit(result: RenderResult, args: argparse.Namespace) -> None:
    if args.json:
        payload = {
            "html": result.html,
            "headings": [asdict(h) for h in result.headings],
        }
        out = json.dumps(payload, indent=2)
    else:
        out = result.html

    target = getattr(args, "output", None)
    if target:
        Path(target).write_text(out + "\n", encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {target}", file=sys.stderr)
    else:
        print(out)


def cmd_render(args: argparse.Namespace, rt: Any) -> int:
    """Render a markdown file (or stdin) to HTML."""
    text = _read_input(args.file)
    _emit(rt.render_text(text), args)
    return 0


def cmd_show(args: argparse.Namespace, rt: Any) -> int:
    """Render a stored note by id."""
    _emit(rt.render_note(args.id), args)
    return 0


def cmd_toc(args: argparse.Namespace, rt: Any) -> int:
    """Print the heading outline with the anchor ids the renderer assigns."""
    text = _read_input(args.file)
    headings = rt.render_text(text).headings

    if args.json:
        print(json.dumps([asdict(h) for h in headings], indent=2))
        return 0

    for h in headings:
        indent = "  " * (h.level - 1)
        print(f"{h.id}\t{indent}{h.text}")
    return 0


def cmd_notes(args: argparse.Namespace, rt: Any) -> int:
    """List notes available for wiki-links."""
    refs = rt.notes.list_refs()

    if args.json:
        print(json.dumps([asdict(r) for r in refs], indent=2))
        return 0

    for ref in refs:
        print(f"{ref.id}\t{ref.title}")
    if not refs and not args.quiet:
        print(f"No notes in {rt.notes.root}", file=sys.stderr)
    return 0


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install notara[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

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

    host = args.host or rt.config.server.host
    port = args.port or rt.config.server.port

    print(f"Starting server on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")

    return 0


def version_text() -> str:
    return "\n".join(
        [
            f"notara {__version__}",
            f"python {platform.python_version()}",
            f"platform {platform.platform()}",
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notara", description="Render Notara markdown notes to HTML"
    )
    parser.add_argument(
        "--version", action="version", version=version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/notara.toml, notes/notara.toml)",
    )
    parser.add_argument(
        "--notes",
        type=Path,
        default=None,
        help="Path to notes directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    parser_render = subparsers.add_parser("render", help="Render a markdown file to HTML")
    parser_render.add_argument("file", nargs="?", default="-", help="Markdown file ('-' for stdin)")
    parser_render.add_argument("-o", "--output", default=None, help="Write output to file")

    parser_show = subparsers.add_parser("show", help="Render a stored note by id")
    parser_show.add_argument("id", help="Note ID")
    parser_show.add_argument("-o", "--output", default=None, help="Write output to file")

    parser_toc = subparsers.add_parser("toc", help="Print heading outline with anchor ids")
    parser_toc.add_argument("file", nargs="?", default="-", help="Markdown file ('-' for stdin)")

    subparsers.add_parser("notes", help="List notes available for wiki-links")

    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default=None, help="Bind host (default from config)")
    parser_serve.add_argument("--port", type=int, default=None, help="Bind port (default from config)")
    parser_serve.add_argument(
        "--token",
        default="auto",
        help="Bearer token: 'auto' (generate), 'none' (disable), or explicit value",
    )
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    return parser


def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        rt = build_runtime(notes_path=args.notes, config_path=args.config)
    except NotaraError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    handlers = {
        "render": cmd_render,
        "show": cmd_show,
        "toc": cmd_toc,
        "notes": cmd_notes,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
