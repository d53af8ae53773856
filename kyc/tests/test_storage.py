import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import InMemoryStorage

from kyc.exceptions import DocumentStorageError
from kyc.storage import DocumentStore, document_key


def test_document_key_layout():
    assert document_key(7, 42, "gst", "pdf", now_ms=1700000000123) == "7/42/gst_1700000000123.pdf"
    assert document_key(7, 42, "pan", now_ms=5) == "7/42/pan_5"


def test_upload_and_download_roundtrip():
    store = DocumentStore(InMemoryStorage())
    key = document_key(1, 2, "gst", "pdf", now_ms=1)
    assert store.upload(key, ContentFile(b"payload")) == key
    assert store.exists(key)
    assert store.download(key) == b"payload"


def test_upload_never_overwrites():
    store = DocumentStore(InMemoryStorage())
    store.upload("1/2/gst_1.pdf", ContentFile(b"first"))
    with pytest.raises(DocumentStorageError):
        store.upload("1/2/gst_1.pdf", ContentFile(b"second"))
    assert store.download("1/2/gst_1.pdf") == b"first"


def test_upload_wraps_os_errors(monkeypatch):
    backend = InMemoryStorage()

    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(backend, "save", boom)
    with pytest.raises(DocumentStorageError, match="disk full"):
        DocumentStore(backend).upload("1/2/gst_1.pdf", ContentFile(b"x"))


def test_download_missing_key():
    with pytest.raises(DocumentStorageError):
        DocumentStore(InMemoryStorage()).download("nope/missing.pdf")


def test_default_backend_comes_from_settings():
    from django.core.files.storage import storages

    assert DocumentStore().storage is storages["kyc_documents"]
