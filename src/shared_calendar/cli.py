from __future__ import annotations

import argparse
import logging
import sys

from .core import CalendarStore
from .logging import configure_logging
from .services.http import run_local_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shared calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API for the calendar store.")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    list_parser = subparsers.add_parser("list", help="Print the ids of stored calendars.")
    list_parser.add_argument("--since", default=None, help="Only calendars created after this D-M-YYYY date.")

    return parser


def _list_calendars(since: str | None) -> int:
    store = CalendarStore.open()
    if since is None:
        ids = store.list_ids()
    else:
        result = store.list_ids_created_after(since)
        if not result.ok:
            print(result.message, file=sys.stderr)
            return 1
        ids = result.value
    for uid in ids:
        print(uid)
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    logging.getLogger(__name__).info("Shared calendar CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        run_local_server(host=args.host, port=args.port)
        return 0
    if args.command == "list":
        return _list_calendars(args.since)
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


if __name__ == "__main__":
    sys.exit(main())
