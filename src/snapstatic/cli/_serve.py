"""``snapstatic serve`` — run one handler behind the pounce ASGI server."""

import argparse
import sys

from snapstatic.app import StaticApp
from snapstatic.config import HandlerConfig, ServerConfig
from snapstatic.errors import ConfigurationError
from snapstatic.handler import StaticHandler


def build_app(args: argparse.Namespace) -> StaticApp:
    """Build the ASGI app described by the command-line arguments."""
    config = HandlerConfig(
        root=args.root,
        prefix=args.prefix,
        disallow_shared_cache=args.private,
    )
    return StaticApp([StaticHandler(config)])


def run_server(args: argparse.Namespace) -> None:
    """Start pounce with a single worker.

    One worker keeps one snapshot; with several, a rebuild trigger would
    only refresh the worker that received it.
    """
    try:
        app = build_app(args)
        overrides = {"host": args.host, "port": args.port}
        server_config = ServerConfig(
            **{key: value for key, value in overrides.items() if value is not None}
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    try:
        from pounce.config import ServerConfig as PounceConfig
        from pounce.server import Server
    except ImportError as exc:
        print(
            "Error: snapstatic serve requires the pounce ASGI server. "
            "Install it with: pip install snapstatic[server]",
            file=sys.stderr,
        )
        raise SystemExit(2) from exc

    config = PounceConfig(host=server_config.host, port=server_config.port, workers=1)
    Server(config, app).run()
