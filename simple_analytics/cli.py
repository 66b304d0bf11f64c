#!/usr/bin/env python3
"""
Command line client for sending pageviews and events, and for managing the
opt-out flag.

    simple-analytics --hostname app.example.com pageview list detailview
    simple-analytics --hostname app.example.com event signup --meta plan=premium
    simple-analytics opt-out
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from .config import load_config
from .errors import SimpleAnalyticsError
from .logging_config import setup_logging, stop_logging
from .storage import OPTED_OUT_KEY, VISIT_DATE_KEY, JsonFileStore
from .tracker import SimpleAnalytics

logger = logging.getLogger(__name__)


def _parse_metadata(pairs: List[str]) -> Dict[str, str]:
    metadata = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Metadata must be KEY=VALUE, got {pair!r}")
        metadata[key] = value
    return metadata


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simple-analytics", description="Send pageviews and events to Simple Analytics"
    )
    parser.add_argument("--hostname", help="Hostname registered in Simple Analytics")
    parser.add_argument("--shared-scope", help="Shared storage scope for unique visit counting")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    pageview = sub.add_parser("pageview", help="Track a pageview")
    pageview.add_argument("path", nargs="*", help="Path segments")
    pageview.add_argument("--meta", action="append", default=[], metavar="KEY=VALUE")

    event = sub.add_parser("event", help="Track a named event")
    event.add_argument("name", help="Event name")
    event.add_argument("path", nargs="*", help="Path segments")
    event.add_argument("--meta", action="append", default=[], metavar="KEY=VALUE")

    sub.add_parser("opt-out", help="Stop all tracking on this device")
    sub.add_parser("opt-in", help="Resume tracking on this device")
    sub.add_parser("status", help="Show opt-out flag and last unique visit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)
    setup_logging(debug=args.debug or config.debug)
    try:
        store = JsonFileStore(config.storage_dir)

        if args.command in ("opt-out", "opt-in"):
            store.set(OPTED_OUT_KEY, None, args.command == "opt-out")
            print(f"Opted {'out' if args.command == 'opt-out' else 'in'}")
            return 0

        if args.command == "status":
            print(f"Opted out: {bool(store.get(OPTED_OUT_KEY))}")
            print(f"Last unique visit: {store.get(VISIT_DATE_KEY, args.shared_scope) or 'never'}")
            return 0

        if not args.hostname:
            parser.error("--hostname is required to track")
        try:
            metadata = _parse_metadata(args.meta)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

        tracker = SimpleAnalytics(args.hostname, args.shared_scope, store=store, config=config)
        event = args.name if args.command == "event" else None
        try:
            asyncio.run(tracker.track_raw(event=event, path=args.path, metadata=metadata or None))
        except SimpleAnalyticsError as e:
            logger.error(f"Tracking failed: {e}")
            return 1
        finally:
            tracker.close()
        return 0
    finally:
        stop_logging()


if __name__ == "__main__":
    sys.exit(main())
