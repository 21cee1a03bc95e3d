"""Data models used throughout the import pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SourceFile:
    """An export file read from disk."""

    path: Path
    content: bytes

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class DocumentMetadata:
    """Metadata describing an exported post."""

    title: str
    summary: str
    created: dt.datetime


@dataclass
class ImageCandidate:
    """Image reference discovered in the post body."""

    src: str
    alt_text: str


@dataclass
class AssetHandle:
    """Stored image bytes as returned by an asset store."""

    identifier: str
    name: str
    path: Optional[Path] = None


@dataclass
class MediaAsset:
    """Registered image asset owned by a content record."""

    identifier: str
    filename: str
    alt_text: str
    owner_id: int
    source_url: str = ""
    path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "filename": self.filename,
            "alt": self.alt_text,
            "owner_id": self.owner_id,
            "source_url": self.source_url,
            "path": str(self.path) if self.path else None,
        }


@dataclass
class ContentRecord:
    """Normalized post ready for the content store."""

    title: str
    summary: str
    created: dt.datetime
    body: str
    assets: List[MediaAsset] = field(default_factory=list)
    owner_id: int = 1
    content_type: str = "featured_content"
    text_format: str = "standard"
    published: bool = True
    source_name: str = ""

    @property
    def lead(self) -> Optional[MediaAsset]:
        """The primary image, which never appears inline in the body."""
        return self.assets[0] if self.assets else None

    def to_dict(self) -> Dict[str, Any]:
        lead = self.lead
        return {
            "type": self.content_type,
            "title": self.title,
            "summary": self.summary,
            "created": self.created.isoformat(),
            "owner_id": self.owner_id,
            "published": self.published,
            "body": {"value": self.body, "format": self.text_format},
            "lead_media": lead.identifier if lead else None,
            "assets": [asset.to_dict() for asset in self.assets],
            "source": self.source_name,
        }


@dataclass
class FileResult:
    """Outcome of importing a single export file."""

    source_path: Path
    record_id: str
    record: ContentRecord

    @property
    def asset_count(self) -> int:
        return len(self.record.assets)


@dataclass
class RunTotals:
    """Counters accumulated across one import run."""

    records: int = 0
    assets: int = 0
    skipped_files: int = 0

    def add(self, result: FileResult) -> None:
        self.records += 1
        self.assets += result.asset_count
