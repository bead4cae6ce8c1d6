"""
Module: cli

Purpose:
    Command-line front end: bind files and folders into a book and list
    its pages and spreads.

Key Functions:
    - main(): Entry point for the `livremele` console script
    - build_parser(): Argument parser
    - format_page_table(), format_spread(): Text rendering

Usage:
    livremele book/ extra-page.svg --no-spacer
    livremele book/ --spread 2 -vv --timing
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from livremele import __version__
from livremele.core.errors import FatalIngestError
from livremele.core.models import (
    SPACER,
    BookLayoutConfig,
    PageDocument,
    Slot,
    SpreadResult,
)
from livremele.ingest import (
    TimingLog,
    files_from_paths,
    process_files_sync,
    transfer_from_paths,
)
from livremele.layout import BookNavigator
from livremele.utils.logging_utils import configure_logging, detach_handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livremele",
        description="Bind a folder of SVG pages into a two-page spread book.",
    )
    parser.add_argument("paths", nargs="+", help="SVG files, assets, or folders to ingest")
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Treat paths as a flat file selection (folders are not expanded)",
    )
    parser.add_argument("--no-cover", action="store_true", help="Do not show page 1 alone as a cover")
    parser.add_argument("--no-spacer", action="store_true", help="Do not insert a blank alignment page")
    parser.add_argument("--spread", type=int, default=None, help="Show only this spread (1-based)")
    parser.add_argument("--timing", action="store_true", help="Print per-phase timings")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_slot(slot: Slot) -> str:
    if slot is SPACER:
        return "[spacer]"
    if isinstance(slot, PageDocument):
        return f"{slot.index + 1}:{slot.name}"
    return "-"


def format_page_table(pages: Sequence[PageDocument]) -> str:
    lines = [f"{'#':>4}  {'size':>15}  name"]
    for page in pages:
        size = f"{page.width:g}x{page.height:g}"
        lines.append(f"{page.index + 1:>4}  {size:>15}  {page.name}")
    return "\n".join(lines)


def format_spread(number: int, spread: SpreadResult) -> str:
    if spread.is_cover_view:
        return f"spread {number:>3}: cover {format_slot(spread.right)}"
    return f"spread {number:>3}: {format_slot(spread.left)} | {format_slot(spread.right)}"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    handler = configure_logging(args.verbose)
    timing_log = TimingLog() if args.timing else None

    try:
        source = files_from_paths(args.paths) if args.flat else transfer_from_paths(args.paths)
        pages = process_files_sync(source, timing_log=timing_log)
    except (FatalIngestError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        detach_handler(handler)

    if not pages:
        print("No SVG pages found.", file=sys.stderr)
        return 1

    navigator = BookNavigator(
        pages,
        BookLayoutConfig(has_cover=not args.no_cover, use_spacer=not args.no_spacer),
    )

    print(format_page_table(pages))
    print()

    if args.spread is not None:
        if not 1 <= args.spread <= navigator.total_spreads:
            print(f"Error: spread must be between 1 and {navigator.total_spreads}", file=sys.stderr)
            return 2
        navigator.go_to(args.spread - 1)
        print(format_spread(args.spread, navigator.current_spread()))
    else:
        for index in range(navigator.total_spreads):
            navigator.go_to(index)
            print(format_spread(index + 1, navigator.current_spread()))

    if timing_log is not None:
        print(timing_log.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
