"""Snapstatic CLI — serve a directory from memory, or inspect its snapshot.

Entry point registered as ``snapstatic`` in ``pyproject.toml``::

    [project.scripts]
    snapstatic = "snapstatic.cli:main"
"""

import argparse
import logging
import sys


def _add_handler_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", help="Directory to serve")
    parser.add_argument("--prefix", default="", help="URL prefix (e.g. /docs)")
    parser.add_argument(
        "--private",
        action="store_true",
        help="Disallow shared caches (Cache-Control public -> private)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``snapstatic`` command."""
    parser = argparse.ArgumentParser(
        prog="snapstatic",
        description="Serve a static directory tree from an in-memory snapshot.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("critical", "error", "warning", "info", "debug"),
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- snapstatic serve -------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Start an HTTP server")
    _add_handler_arguments(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- snapstatic inspect -----------------------------------------------
    inspect_parser = subparsers.add_parser(
        "inspect", help="Build one snapshot and list its entries"
    )
    _add_handler_arguments(inspect_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from snapstatic.cli._serve import run_server

        run_server(args)
    elif args.command == "inspect":
        from snapstatic.cli._inspect import run_inspect

        run_inspect(args)
