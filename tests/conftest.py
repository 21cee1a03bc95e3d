from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

from medium_import.config import ImportConfig
from medium_import.errors import AssetStoreError, ContentStoreError, FetchError
from medium_import.images import ImageProcessor
from medium_import.models import AssetHandle, ContentRecord, MediaAsset

LEAD_URL = "https://cdn-images-1.medium.com/max/800/1*lead.png"
SECOND_URL = "https://cdn-images-1.medium.com/max/1024/1*second.jpeg"

EXPORT_HTML = """<!DOCTYPE html><html><head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"><title>My Title</title>
</head><body><article class="h-entry">
<header><h1 class="p-name">My Title</h1></header>
<section data-field="subtitle" class="p-summary">
  A short summary
</section>
<section data-field="body" class="e-content">
<section name="s1" class="section section--body section--first">
<div class="section-divider"><hr class="section-divider"></div>
<div class="section-content"><div class="section-inner sectionLayout--insetColumn">
<h3 name="t1" class="graf graf--h3 graf--leading graf--title">My Title</h3>
<figure name="f1" class="graf graf--figure"><img class="graf-image" data-image-id="1*lead.png" src="%(lead)s"><figcaption class="imageCaption">Lead caption</figcaption></figure>
<p name="p1" class="graf graf--p">First paragraph.</p>
<h4 name="h1" class="graf graf--h4">Section heading</h4>
<figure name="f2" class="graf graf--figure"><img class="graf-image" alt="Second" src="%(second)s"><figcaption class="imageCaption">Second "caption" &amp; more</figcaption></figure>
<blockquote name="q1" class="graf graf--blockquote">To stay up to date with our newsletter, subscribe.</blockquote>
<p name="p2" class="graf graf--p graf--trailing">Last paragraph.</p>
</div></div></section>
</section>
</article></body></html>
""" % {"lead": LEAD_URL, "second": SECOND_URL}


class FakeFetcher:
    """Returns fake bytes for every URL except the ones marked as failing."""

    def __init__(self, failing: Optional[Set[str]] = None) -> None:
        self.failing = failing or set()
        self.requested: List[str] = []

    def fetch(self, url: str) -> bytes:
        self.requested.append(url)
        if url in self.failing:
            raise FetchError(url, "404 Client Error: Not Found")
        return f"image:{url}".encode("utf-8")


class FakeAssetStore:
    def __init__(
        self,
        failing_store: Optional[Set[str]] = None,
        failing_register: Optional[Set[str]] = None,
    ) -> None:
        self.failing_store = failing_store or set()
        self.failing_register = failing_register or set()
        self.stored: Dict[str, bytes] = {}
        self.registered: List[MediaAsset] = []

    def store(self, data: bytes, filename: str) -> AssetHandle:
        if filename in self.failing_store:
            raise AssetStoreError(f"disk full writing {filename}")
        identifier = f"asset-{len(self.stored) + 1}"
        self.stored[identifier] = data
        return AssetHandle(identifier=identifier, name=filename)

    def register(self, handle: AssetHandle, alt_text: str, owner_id: int) -> MediaAsset:
        if handle.name in self.failing_register:
            raise AssetStoreError(f"cannot register {handle.name}")
        asset = MediaAsset(
            identifier=handle.identifier,
            filename=handle.name,
            alt_text=alt_text,
            owner_id=owner_id,
        )
        self.registered.append(asset)
        return asset


class FakeContentStore:
    def __init__(self, failing_titles: Optional[Set[str]] = None) -> None:
        self.failing_titles = failing_titles or set()
        self.records: List[ContentRecord] = []

    def create_record(self, record: ContentRecord) -> str:
        if record.title in self.failing_titles:
            raise ContentStoreError(f"database unavailable for {record.title}")
        self.records.append(record)
        return f"record-{len(self.records)}"


def write_export(directory: Path, name: str, html: str = EXPORT_HTML) -> Path:
    path = directory / name
    path.write_text(html, encoding="utf-8")
    return path


@pytest.fixture
def config() -> ImportConfig:
    return ImportConfig()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def processor(fetcher: FakeFetcher, asset_store: FakeAssetStore, config: ImportConfig) -> ImageProcessor:
    return ImageProcessor(fetcher, asset_store, config)
