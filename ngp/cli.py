"""Command-line front door for ngp.

Parses CLI options into a ``SearchRequest``, loads the editor config, sets
up file logging, and dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .runtime import run_browser
from .runtime.config import LOG_PATH, ConfigError, load_config
from .search import SearchRequest

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngp",
        description="Browse recursive grep results and open matches in an editor.",
    )
    parser.add_argument("-i", dest="ignore_case", action="store_true", help="Ignore case distinctions in pattern.")
    parser.add_argument("-r", dest="raw", action="store_true", help="Raw mode: search every file.")
    parser.add_argument("-t", dest="file_type", metavar="TYPE", help="Look for one file extension only.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the browser.")
    parser.add_argument("pattern", help="Pattern passed to grep.")
    parser.add_argument("directory", nargs="?", default=".", help="Directory to search. Defaults to current directory.")
    return parser


def parse_request(argv: list[str] | None = None) -> tuple[SearchRequest, argparse.Namespace]:
    """Parse ``argv`` and validate it before any runtime state exists."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.pattern:
        parser.error("pattern must not be empty")
    if not Path(args.directory).is_dir():
        parser.error(f"not a directory: {args.directory}")
    if args.file_type is not None and not args.file_type:
        parser.error("-t requires a non-empty extension")
    request = SearchRequest(
        pattern=args.pattern,
        directory=args.directory,
        ignore_case=args.ignore_case,
        raw=args.raw,
        file_type=args.file_type,
    )
    return request, args


def configure_logging(level: str, path: Path = LOG_PATH) -> None:
    """Send log records to a file so they never draw over the browser."""
    root = logging.getLogger()
    root.setLevel(level)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the results browser.

    Usage errors exit with status 2 through argparse. A missing editor config
    and fatal runtime failures exit with status 1.
    """
    request, args = parse_request(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        print(f"ngp: {exc}", file=sys.stderr)
        print("Could be that the configuration file has not been found", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(config.log_level)
    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    try:
        status = run_browser(request, config, no_color=no_color)
    except MemoryError as exc:
        logging.getLogger(__name__).critical("out of memory while storing results")
        print("ngp: out of memory while storing results", file=sys.stderr)
        raise SystemExit(1) from exc
    raise SystemExit(status)


if __name__ == "__main__":
    main()
