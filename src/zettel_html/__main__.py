"""CLI entry-point for zettel_html.

Usage:
    python -m zettel_html render <file> [--format sexpr|zjson] [--heading-offset N]
                                        [--unique PREFIX] [--no-footnotes] [--no-links]
                                        [--config FILE] [--json] [--validate]
    python -m zettel_html read <file>
    python -m zettel_html validate <file>

``-`` as file reads standard input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import jsonschema

from zettel_html import __version__
from zettel_html.api import render_sexpr, render_zjson
from zettel_html.contracts.load import tree_errors
from zettel_html.core.config import ConfigError, RenderConfig, load_config
from zettel_html.errors import ParseError
from zettel_html.sexpr.reader import read_all
from zettel_html.utils.exit_codes import ExitCode
from zettel_html.utils.json_norm import stable_json_dumps

_logger = logging.getLogger("zettel_html")


def _read_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8-sig")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="zettel-html",
        description="Lower zettel markup trees (s-expression or generic JSON) into HTML.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log render diagnostics to stderr.",
    )
    sub = p.add_subparsers(dest="command")

    # ── render subcommand ───────────────────────────────────────────
    render_p = sub.add_parser("render", help="Render a tree to an HTML fragment.")
    render_p.add_argument("file", help="Tree file, or '-' for stdin.")
    render_p.add_argument(
        "--format",
        dest="input_format",
        choices=("sexpr", "zjson"),
        default=None,
        help="Input representation (default: from config, else sexpr).",
    )
    render_p.add_argument("--heading-offset", dest="heading_offset", type=int, default=None)
    render_p.add_argument("--unique", dest="unique_prefix", default=None, help="Id prefix.")
    render_p.add_argument(
        "--no-footnotes",
        dest="emit_footnotes",
        action="store_false",
        default=None,
        help="Do not emit footnote references or endnotes.",
    )
    render_p.add_argument(
        "--no-links",
        dest="suppress_links",
        action="store_true",
        default=None,
        help="Render links and marks as spans.",
    )
    render_p.add_argument("--config", type=Path, default=None, help="YAML or JSON config file.")
    render_p.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        default=False,
        help="Emit {html, ok, error} as JSON.",
    )
    render_p.add_argument(
        "--validate",
        action="store_true",
        default=False,
        help="Schema-check a generic tree before rendering.",
    )

    # ── read subcommand ─────────────────────────────────────────────
    read_p = sub.add_parser("read", help="Print the canonical form of s-expression text.")
    read_p.add_argument("file", help="S-expression file, or '-' for stdin.")

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser("validate", help="Validate a generic tree against the bundled schema.")
    val_p.add_argument("file", help="JSON tree file, or '-' for stdin.")
    return p


def _effective_config(args: argparse.Namespace) -> RenderConfig:
    cfg = load_config(args.config)
    overrides = {
        key: getattr(args, key)
        for key in ("input_format", "heading_offset", "unique_prefix", "emit_footnotes", "suppress_links")
        if getattr(args, key) is not None
    }
    if not overrides:
        return cfg
    merged = {
        "heading_offset": cfg.heading_offset,
        "unique_prefix": cfg.unique_prefix,
        "emit_footnotes": cfg.emit_footnotes,
        "suppress_links": cfg.suppress_links,
        "input_format": cfg.input_format,
        **overrides,
    }
    return RenderConfig(**merged)


def _handle_render(args: argparse.Namespace) -> int:
    try:
        cfg = _effective_config(args)
        text = _read_input(args.file)
        if cfg.input_format == "zjson":
            result = render_zjson(json.loads(text), cfg, validate=args.validate)
        else:
            result = render_sexpr(text, cfg)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ParseError, ConfigError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except RecursionError:
        print("ERROR: input nested too deeply", file=sys.stderr)
        return ExitCode.ERROR

    if args.as_json:
        sys.stdout.write(stable_json_dumps(result.to_dict()))
    else:
        sys.stdout.write(result.html)
        sys.stdout.write("\n")
        if not result.ok:
            print(f"FAIL: {result.error}", file=sys.stderr)
    return ExitCode.SUCCESS if result.ok else ExitCode.VIOLATION


def _handle_read(args: argparse.Namespace) -> int:
    try:
        values = read_all(_read_input(args.file))
    except (OSError, ParseError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    for value in values:
        print(value)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    try:
        tree = json.loads(_read_input(args.file))
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    errors = tree_errors(tree)
    if errors:
        for line in errors:
            print(f"FAIL: {line}", file=sys.stderr)
        return ExitCode.VIOLATION
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an exit code (0 = ok, 1 = violation, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        return _handle_render(args)
    if args.command == "read":
        return _handle_read(args)
    if args.command == "validate":
        return _handle_validate(args)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
