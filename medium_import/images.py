"""Image downloading and in-body image substitution."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

import requests
from bs4 import BeautifulSoup, Tag
from filetype import guess

from .config import ALT_FALLBACK_TITLE, DEFAULT_FETCH_TIMEOUT, ImportConfig
from .errors import AssetStoreError, FetchError
from .models import AssetHandle, ImageCandidate, MediaAsset
from .render import build_placeholder
from .utils import filename_from_url, upgrade_image_url

logger = logging.getLogger("medium_import")


class Fetcher(Protocol):
    def fetch(self, url: str) -> bytes: ...


class AssetStore(Protocol):
    def store(self, data: bytes, filename: str) -> AssetHandle: ...

    def register(self, handle: AssetHandle, alt_text: str, owner_id: int) -> MediaAsset: ...


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


class HttpFetcher:
    """Single-attempt HTTP downloader with a bounded timeout."""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> bytes:
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        if not 200 <= resp.status_code < 300:
            raise FetchError(url, f"HTTP {resp.status_code}")
        return resp.content


def image_source(img: Tag) -> str:
    """Return ``src``, falling back to the lazy-load ``data-src`` attribute."""
    return (img.get("src") or "").strip() or (img.get("data-src") or "").strip()


def _has_class(tag: Tag) -> bool:
    value = tag.get("class")
    if isinstance(value, list):
        return any(value)
    return bool(value)


class ImageProcessor:
    """Downloads body images and swaps them for asset placeholders.

    The first image that is stored successfully becomes the lead asset and
    is removed from the body together with its wrapper. Every later image
    is replaced in place by a placeholder element referencing its asset.
    """

    def __init__(self, fetcher: Fetcher, asset_store: AssetStore, config: ImportConfig) -> None:
        self.fetcher = fetcher
        self.asset_store = asset_store
        self.config = config

    def _alt_text(self, candidate: ImageCandidate, title: str) -> str:
        if candidate.alt_text:
            return candidate.alt_text
        if self.config.alt_fallback == ALT_FALLBACK_TITLE:
            return title
        return " "

    def acquire(self, candidate: ImageCandidate, title: str) -> Optional[MediaAsset]:
        """Download, store and register one image; ``None`` when any step fails."""
        url = upgrade_image_url(candidate.src, self.config.image_width)
        logger.info("Downloading image: %s", url)
        try:
            data = self.fetcher.fetch(url)
        except FetchError as exc:
            logger.warning("Failed to download image %s: %s", url, exc.reason)
            return None

        filename = filename_from_url(url)
        try:
            handle = self.asset_store.store(data, filename)
        except AssetStoreError as exc:
            logger.warning("Failed to save image %s: %s", filename, exc)
            return None

        try:
            asset = self.asset_store.register(
                handle, self._alt_text(candidate, title), self.config.owner_id
            )
        except AssetStoreError as exc:
            logger.warning("Failed to register image %s: %s", handle.name, exc)
            return None
        asset.source_url = url
        return asset

    def _remove_lead(self, body: Tag, img: Tag) -> None:
        wrapper = img.parent
        if (
            wrapper is not None
            and wrapper is not body
            and (wrapper.name == "figure" or _has_class(wrapper))
        ):
            wrapper.extract()
        else:
            img.extract()

    def _take_caption(self, img: Tag) -> Optional[str]:
        wrapper = img.parent
        if wrapper is None or wrapper.name != "figure":
            return None
        caption = wrapper.find("figcaption")
        if caption is None:
            return None
        text = caption.get_text().strip()
        caption.extract()
        return text or None

    def process(self, soup: BeautifulSoup, body: Tag, title: str) -> List[MediaAsset]:
        """Walk body images in document order and return the acquired assets, lead first."""
        assets: List[MediaAsset] = []
        images = body.find_all("img")
        for index, img in enumerate(images):
            src = image_source(img)
            if not src:
                logger.warning("Image #%d has no src, skipping", index)
                continue

            candidate = ImageCandidate(src=src, alt_text=(img.get("alt") or "").strip())
            asset = self.acquire(candidate, title)
            if asset is None:
                continue
            assets.append(asset)

            if len(assets) == 1:
                self._remove_lead(body, img)
                logger.debug("Lead image %s removed from body", asset.filename)
                continue

            caption = self._take_caption(img)
            placeholder = build_placeholder(soup, asset, self.config, caption)
            img.replace_with(placeholder)
        return assets
