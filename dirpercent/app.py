from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .drives import filesystem_usage
from .errors import DirPercentError, RootScanError
from .models import ScanResult
from .render import render
from .report import export_report
from .scanner import scan_path
from .utils import format_bytes, percent_of

APP_NAME = "dirpercent"

DEFAULT_ROOT = "."
DEFAULT_DEPTH = 1
DEFAULT_THRESHOLD = 0

EXIT_SUCCESS = 0

logger = logging.getLogger(__name__)
_handler: Optional[logging.Handler] = None


def configure_logging(verbosity: int = 0) -> None:
    """Send package diagnostics to stderr. -1 quiet, 0 normal, 1+ debug."""
    global _handler
    log = logging.getLogger(APP_NAME)
    if _handler is not None:
        log.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    log.addHandler(_handler)
    if verbosity < 0:
        log.setLevel(logging.WARNING)
    elif verbosity == 0:
        log.setLevel(logging.INFO)
    else:
        log.setLevel(logging.DEBUG)


def _depth_arg(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError("DEPTH_LEVEL must be a integer number eg. 3")
    if v < 0:
        raise argparse.ArgumentTypeError("DEPTH_LEVEL must not be negative")
    return v


def _percent_arg(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        v = -1
    if not 0 <= v <= 100:
        raise argparse.ArgumentTypeError(
            "PERCENT_THRESHOLD must be a integer number between 0~100 eg. 10")
    return v


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Show the size of every item of a directory as a percentage of its parent.",
    )
    p.add_argument("directory", nargs="?", metavar="ROOT_DIR",
                   help="directory to calculate (default: current directory)")
    p.add_argument("-d", "--dir", dest="dir_opt", metavar="ROOT_DIR",
                   help="same as the positional ROOT_DIR")
    p.add_argument("-n", "--nest", type=_depth_arg, default=DEFAULT_DEPTH, metavar="DEPTH_LEVEL",
                   help="nest level to display, eg. 3 (default: %(default)s)")
    p.add_argument("-p", "--percent", type=_percent_arg, default=DEFAULT_THRESHOLD,
                   metavar="PERCENT_THRESHOLD",
                   help="minimum percent of the parent an item needs to be shown, eg. 10")
    p.add_argument("--binary", action="store_true",
                   help="use 1024-based units (KiB, MiB) instead of KB, MB")
    p.add_argument("--fs-summary", action="store_true",
                   help="also show the capacity of the filesystem holding ROOT_DIR")
    p.add_argument("--export", metavar="FILE",
                   help="write the scanned tree as JSON to FILE")
    g = p.add_mutually_exclusive_group()
    g.add_argument("-v", "--verbose", action="store_true", help="show debug diagnostics")
    g.add_argument("-q", "--quiet", action="store_true", help="only show warnings and errors")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.directory and args.dir_opt and args.directory != args.dir_opt:
        parser.error("give ROOT_DIR either positionally or with --dir, not both")
    args.root = args.directory or args.dir_opt or DEFAULT_ROOT
    return args


def print_fs_summary(result: ScanResult, binary: bool = False) -> None:
    u = filesystem_usage(result.scanned_path)
    if u is None:
        logger.warning("No filesystem information for %s", result.scanned_path)
        return

    def fb(n: int) -> str:
        return format_bytes(n, binary=binary)

    size = result.root.size if result.root else 0
    print(f"Filesystem {u['mountpoint']} ({u['fstype'] or 'unknown'}): "
          f"total {fb(u['total'])}, used {fb(u['used'])} ({u['percent']:.0f}%), "
          f"free {fb(u['free'])}")
    print(f"Scanned tree uses {fb(size)} = {percent_of(size, u['used'])}% of used space")


def execute(args: argparse.Namespace) -> int:
    print(f"Calculate folder size of {args.root!r} ...")
    result = scan_path(args.root)
    if result.root is None:
        raise RootScanError(f"Cannot scan {args.root}")
    logger.info("Scanned %d files, %d dirs, skipped %d in %.1f sec",
                result.files, result.dirs, result.skipped, result.elapsed_sec)

    render(result.root, args.nest, args.percent, binary=args.binary)

    if args.fs_summary:
        print_fs_summary(result, binary=args.binary)
    if args.export:
        export_report(result, args.export)
        logger.info("Report written to %s", args.export)
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(-1 if args.quiet else 1 if args.verbose else 0)
    try:
        return execute(args)
    except DirPercentError as e:
        logger.error("%s", e)
        return e.exit_code


def run() -> None:
    sys.exit(main())
