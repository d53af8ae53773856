"""Gateway to the object store holding KYC documents."""

from __future__ import annotations

import logging
import time

from django.conf import settings
from django.core.files.storage import Storage, storages

from .exceptions import DocumentStorageError

logger = logging.getLogger(__name__)


def document_key(owner_id, application_id, document_type: str, extension: str = "", *, now_ms: int | None = None) -> str:
    """Key layout: {owner}/{application}/{type}_{epoch millis}[.ext]"""
    stamp = int(time.time() * 1000) if now_ms is None else int(now_ms)
    key = f"{owner_id}/{application_id}/{document_type}_{stamp}"
    return f"{key}.{extension}" if extension else key


class DocumentStore:
    def __init__(self, storage: Storage | None = None):
        self.storage = storage or storages[getattr(settings, "KYC_DOCUMENT_STORAGE", "kyc_documents")]

    def upload(self, key: str, content) -> str:
        """Store `content` under exactly `key`; an existing object is never overwritten."""
        if self.storage.exists(key):
            raise DocumentStorageError(f"Object already exists: {key}")
        try:
            saved = self.storage.save(key, content)
        except OSError as e:
            raise DocumentStorageError(f"Upload failed for {key}: {e}") from e
        if saved != key:
            # Backend picked another name; drop it rather than keep an unreferenced copy
            self.storage.delete(saved)
            raise DocumentStorageError(f"Object already exists: {key}")
        logger.debug("stored document key=%s", key)
        return saved

    def download(self, key: str) -> bytes:
        try:
            with self.storage.open(key, "rb") as fh:
                return fh.read()
        except (FileNotFoundError, OSError) as e:
            raise DocumentStorageError(f"Download failed for {key}: {e}") from e

    def exists(self, key: str) -> bool:
        return self.storage.exists(key)
