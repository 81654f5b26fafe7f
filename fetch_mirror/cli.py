"""Command-line entry point for fetch-mirror."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

import colorama
from colorama import Fore, Style

from .config import ERROR_MAX_LENGTH, MirrorConfig
from .crawler import run
from .models import MetadataReport

logger = logging.getLogger("fetch_mirror.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Download web pages together with their images, scripts and stylesheets.",
    )
    parser.add_argument("urls", nargs="+", help="One or more URLs to mirror")
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Report link/image counts and the last fetch time instead of downloading",
    )
    parser.add_argument(
        "--output",
        default="sources",
        type=Path,
        help="Directory where per-page asset folders are written",
    )
    parser.add_argument(
        "--html-dir",
        default=".",
        type=Path,
        help="Directory where the rewritten HTML files are written",
    )
    parser.add_argument(
        "--logs",
        default="logs",
        type=Path,
        help="Directory holding the per-page fetch logs used by --metadata",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Network timeout in seconds for each request",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(list(sys.argv[1:] if argv is None else argv))


def format_report(report: MetadataReport) -> str:
    return "\n".join(
        [
            f"site: {Fore.CYAN}{report.url}{Style.RESET_ALL}",
            f"num_links: {Fore.GREEN}{report.num_links}{Style.RESET_ALL}",
            f"images: {Fore.GREEN}{report.images}{Style.RESET_ALL}",
            f"last_fetched: {Fore.YELLOW}{report.last_fetched}{Style.RESET_ALL}",
        ]
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    colorama.just_fix_windows_console()

    config = MirrorConfig(
        output_root=args.output,
        html_root=args.html_dir,
        log_root=args.logs,
        timeout=args.timeout,
        error_max_length=ERROR_MAX_LENGTH,
    )

    overall_start = time.perf_counter()
    outcomes = run(args.urls, config, metadata=args.metadata)
    total_elapsed = time.perf_counter() - overall_start

    if args.metadata:
        for report in outcomes:
            if isinstance(report, MetadataReport):
                sys.stdout.write(format_report(report) + "\n\n")
        sys.stdout.flush()

    successes = sum(1 for outcome in outcomes if outcome is not None)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        len(args.urls),
        len(args.urls) - successes,
    )


if __name__ == "__main__":
    main()
