"""Command-line entry point for notegraph."""
from __future__ import annotations

import argparse
import sys

USAGE = """Usage: notegraph COMMAND [ARGS]

Commands:
  analyze NOTES.json          Build a knowledge map from tagged notes
  fuse SOURCE.json [TARGET]   Fuse two node sets into one graph
  serve [--host H] [--port P] Run the HTTP API

Options:
  --version                   Print the version and exit
  -h, --help                  Show this message
"""


def _parse_serve_args(argv: list[str]) -> tuple[str | None, int | None]:
    parser = argparse.ArgumentParser(prog="notegraph serve", description="Run the HTTP API.")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)
    return args.host, args.port


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] in ("-h", "--help"):
        print(USAGE)
        return 0
    if argv[0] == "--version":
        from notegraph import __version__

        print(__version__)
        return 0

    from notegraph.config import Config
    from notegraph.core.logging_config import setup_logging

    command, rest = argv[0], argv[1:]
    if command == "serve":
        from notegraph.api.app import main as serve_main

        host, port = _parse_serve_args(rest)
        return serve_main(host=host, port=port)

    setup_logging(Config.load().logging)
    from notegraph.cli.graph_cmd import run_graph

    return run_graph(argv)


if __name__ == "__main__":
    sys.exit(main())
