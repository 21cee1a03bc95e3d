"""Command-line entry point for the Medium export importer."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import (
    ALT_FALLBACK_CHOICES,
    ALT_FALLBACK_SPACE,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_OWNER_ID,
    ImportConfig,
)
from .images import HttpFetcher
from .importer import run_import
from .storage import JsonContentStore, LocalAssetStore

logger = logging.getLogger("medium_import.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import Medium HTML export files as content records with locally stored images.",
    )
    parser.add_argument(
        "directory",
        type=Path,
        help="Directory containing the exported .html files",
    )
    parser.add_argument(
        "--uid",
        type=int,
        default=DEFAULT_OWNER_ID,
        help="User ID that owns created records and images (default: 1)",
    )
    parser.add_argument(
        "--output",
        default="output",
        type=Path,
        help="Directory where records and images should be written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_FETCH_TIMEOUT,
        help="Per-image download timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--alt-fallback",
        choices=ALT_FALLBACK_CHOICES,
        default=ALT_FALLBACK_SPACE,
        help="Alt text used for images without one: a single space or the post title",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = ImportConfig(
        owner_id=args.uid,
        alt_fallback=args.alt_fallback,
        fetch_timeout=args.timeout,
    )
    output_root = Path(args.output).resolve()

    overall_start = time.perf_counter()
    try:
        totals = run_import(
            args.directory,
            config,
            HttpFetcher(timeout=config.fetch_timeout),
            LocalAssetStore(output_root / "images"),
            JsonContentStore(output_root / "records"),
        )
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    total_elapsed = time.perf_counter() - overall_start

    logger.debug(
        "Finished in %.2fs (%d imported, %d skipped)",
        total_elapsed,
        totals.records,
        totals.skipped_files,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
