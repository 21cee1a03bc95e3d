"""High-level orchestration for turning export files into content records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol

from .config import ImportConfig
from .content import extract_metadata, find_body, load_source, parse_document
from .errors import ContentStoreError, DocumentError
from .images import AssetStore, Fetcher, ImageProcessor
from .models import ContentRecord, FileResult, RunTotals, SourceFile
from .normalize import normalize_body
from .render import serialize_body

logger = logging.getLogger("medium_import")


class ContentStore(Protocol):
    def create_record(self, record: ContentRecord) -> str: ...


def discover_html_files(directory: Path) -> List[Path]:
    """List ``.html`` files directly inside ``directory`` in name order."""
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix == ".html"
    )


def build_record(
    source: SourceFile,
    config: ImportConfig,
    processor: ImageProcessor,
) -> ContentRecord:
    """Run parse, metadata, normalization, image and serialization stages for one file."""
    soup = parse_document(source)
    metadata = extract_metadata(soup, source.path)
    body = find_body(soup)
    normalize_body(soup, body)
    assets = processor.process(soup, body, metadata.title)
    return ContentRecord(
        title=metadata.title,
        summary=metadata.summary,
        created=metadata.created,
        body=serialize_body(body),
        assets=assets,
        owner_id=config.owner_id,
        content_type=config.content_type,
        text_format=config.text_format,
        source_name=source.name,
    )


def import_file(
    path: Path,
    config: ImportConfig,
    processor: ImageProcessor,
    content_store: ContentStore,
) -> Optional[FileResult]:
    """Import a single export file; returns ``None`` when the file is skipped."""
    try:
        source = load_source(path)
        record = build_record(source, config, processor)
        record_id = content_store.create_record(record)
    except DocumentError as exc:
        logger.warning("Skipping %s: %s", path.name, exc)
        return None
    except ContentStoreError as exc:
        logger.error("Failed to create record for %s: %s", path.name, exc)
        return None
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error importing %s", path.name)
        return None

    logger.info("Created record %s for %s", record_id, record.title)
    return FileResult(source_path=path, record_id=record_id, record=record)


def run_import(
    directory: Path,
    config: ImportConfig,
    fetcher: Fetcher,
    asset_store: AssetStore,
    content_store: ContentStore,
) -> RunTotals:
    """Import every export file in ``directory`` sequentially."""
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    totals = RunTotals()
    paths = discover_html_files(directory)
    if not paths:
        logger.info("No .html files found in %s", directory)
        return totals

    processor = ImageProcessor(fetcher, asset_store, config)
    for path in paths:
        logger.info("Importing: %s", path.name)
        result = import_file(path, config, processor, content_store)
        if result is None:
            totals.skipped_files += 1
            continue
        totals.add(result)
        logger.info(
            "Imported 1 record(s) with %d image(s) from %s",
            result.asset_count,
            result.source_path.name,
        )

    logger.info(
        "Import complete. Created %d records and %d images in total.",
        totals.records,
        totals.assets,
    )
    return totals
