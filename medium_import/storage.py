"""Local filesystem implementations of the asset and content stores."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path

from .errors import AssetStoreError, ContentStoreError
from .images import detect_image_format
from .models import AssetHandle, ContentRecord, MediaAsset
from .utils import slugify

logger = logging.getLogger("medium_import")


def unique_destination(directory: Path, filename: str) -> Path:
    """Return a path in ``directory`` that does not exist yet, suffixing ``_0``, ``_1``, ..."""
    destination = directory / filename
    if not destination.exists():
        return destination
    stem, suffix = destination.stem, destination.suffix
    counter = 0
    while True:
        candidate = directory / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


class LocalAssetStore:
    """Writes image bytes below ``root`` and keeps a ``media.jsonl`` manifest."""

    MANIFEST_NAME = "media.jsonl"

    def __init__(self, root: Path) -> None:
        self.root = root

    def _prepare(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssetStoreError(f"Cannot create asset directory {self.root}: {exc}") from exc

    def store(self, data: bytes, filename: str) -> AssetHandle:
        self._prepare()
        if not Path(filename).suffix:
            extension = detect_image_format(data)
            if extension:
                filename = f"{filename}.{extension}"
        destination = unique_destination(self.root, filename)
        try:
            destination.write_bytes(data)
        except OSError as exc:
            raise AssetStoreError(f"Failed to write {destination}: {exc}") from exc
        logger.debug("Saved %d bytes to %s", len(data), destination)
        return AssetHandle(identifier=str(uuid.uuid4()), name=destination.name, path=destination)

    def register(self, handle: AssetHandle, alt_text: str, owner_id: int) -> MediaAsset:
        asset = MediaAsset(
            identifier=handle.identifier,
            filename=handle.name,
            alt_text=alt_text,
            owner_id=owner_id,
            path=handle.path,
        )
        manifest = self.root / self.MANIFEST_NAME
        try:
            with manifest.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(asset.to_dict()) + "\n")
        except OSError as exc:
            raise AssetStoreError(f"Failed to register {handle.name}: {exc}") from exc
        return asset


class JsonContentStore:
    """Persists each content record as a JSON document below ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def create_record(self, record: ContentRecord) -> str:
        record_id = str(uuid.uuid4())
        payload = {"id": record_id, **record.to_dict()}
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            destination = unique_destination(self.root, f"{slugify(record.title)[:80]}.json")
            destination.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise ContentStoreError(f"Failed to save record {record.title!r}: {exc}") from exc
        logger.debug("Saved record %s to %s", record_id, destination)
        return record_id
