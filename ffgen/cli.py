"""CLI entrypoints for ffgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from .config import ConfigError
from .generator import CommandGenerator, Status
from .interaction import (
    AcceptPrompt,
    ConsolePicker,
    ConsolePrompt,
    PyperclipClipboard,
    SelectAllPicker,
    StdoutClipboard,
)
from .logging import configure_logging
from .workspace import read_paths_file


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Sub-commands suppress their defaults so a flag given before the
    # sub-command is not reset by the sub-parser.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write DEBUG-level logs to PATH.",
    )


def _add_input_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        help="Open files to start from (relative paths are taken from --root).",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root holding .ffgen.yml and tsconfig.json (defaults to current directory).",
    )
    parser.add_argument(
        "--files-from",
        metavar="PATH",
        help="Read additional files, one per line, from PATH ('-' for stdin).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ffgen",
        description="Generate File Forge (ffg) commands from files and their imports.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Pick files and their imports, then copy the ffg command.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    _add_input_options(generate_parser)
    generate_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Include every discovered file without asking.",
    )
    generate_parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Use the generated command as-is instead of offering to edit it.",
    )
    generate_parser.add_argument(
        "--no-clipboard",
        action="store_true",
        help="Print the command to stdout instead of copying it.",
    )

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="List the files reachable from the given files, with provenance.",
    )
    _add_logging_options(resolve_parser, suppress_default=True)
    _add_input_options(resolve_parser)
    resolve_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of plain text.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service for editor integrations.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address.")
    serve_parser.add_argument("--port", type=int, default=8765, help="Bind port.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ffgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        paths = _collect_paths(parser, args)
        generator = CommandGenerator(
            picker=SelectAllPicker() if args.yes else ConsolePicker(),
            prompt=AcceptPrompt() if args.no_prompt else ConsolePrompt(),
            clipboard=StdoutClipboard() if args.no_clipboard else PyperclipClipboard(),
        )
        outcome = generator.generate(args.root, paths)
        if outcome.status is Status.FAILED:
            parser.exit(1, "Run with --verbose for more details.\n")
    elif args.command == "resolve":
        paths = _collect_paths(parser, args)
        generator = CommandGenerator()
        try:
            prepared = generator.prepare(args.root, paths)
        except ConfigError as exc:
            parser.exit(1, f"ffgen resolve failed: {exc}\n")
        if args.json:
            payload = {
                "files": [str(path) for path in prepared.walk.files],
                "provenance": _provenance_payload(prepared.walk.provenance),
                "errors": {str(path): error for path, error in prepared.walk.errors.items()},
                "skipped": [str(path) for path in prepared.skipped],
            }
            print(json.dumps(payload, indent=2))
        else:
            for item in prepared.items:
                line = item.description
                if item.detail:
                    line += f"  ({item.detail})"
                print(line)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _collect_paths(parser: argparse.ArgumentParser, args: argparse.Namespace) -> List[str]:
    paths = list(args.files)
    if args.files_from:
        try:
            paths.extend(read_paths_file(args.files_from))
        except (OSError, UnicodeDecodeError) as exc:
            parser.exit(1, f"Cannot read {args.files_from}: {exc}\n")
    return paths


def _provenance_payload(provenance: Dict[Path, set]) -> Dict[str, List[str]]:
    return {
        str(path): sorted((str(origin) for origin in origins), key=str.lower)
        for path, origins in provenance.items()
    }


if __name__ == "__main__":
    main(sys.argv[1:])
