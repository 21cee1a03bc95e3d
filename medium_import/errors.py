"""Exceptions raised by the importer and its collaborators."""

from __future__ import annotations


class MediumImportError(Exception):
    """Base class for importer failures."""


class DocumentError(MediumImportError):
    """An export file cannot be turned into a content record."""


class FetchError(MediumImportError):
    """A remote image could not be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class AssetStoreError(MediumImportError):
    """Image bytes could not be persisted or registered."""


class ContentStoreError(MediumImportError):
    """A content record could not be created."""
