from __future__ import annotations

import logging

from django.http import HttpResponse

from .exceptions import DocumentStorageError
from .models import VendorDocument
from .storage import DocumentStore

logger = logging.getLogger(__name__)


def document_response(doc: VendorDocument, store: DocumentStore | None = None) -> HttpResponse:
    """Stored bytes as an attachment named `{type}_document.{ext}`. Raises DocumentStorageError."""
    store = store or DocumentStore()
    try:
        payload = store.download(doc.storage_key)
    except DocumentStorageError:
        logger.exception("document download failed id=%s key=%s", doc.pk, doc.storage_key)
        raise
    resp = HttpResponse(payload, content_type=doc.content_type or "application/octet-stream")
    resp["Content-Disposition"] = f'attachment; filename="{doc.download_name}"'
    return resp
