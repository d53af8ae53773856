"""
Staging area for KYC document uploads.

Files are checked here before anything touches the database or the object
store. A set holds at most one file per document type; staging a second file
of the same type replaces (and releases) the first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile

from .exceptions import AttachmentRejected
from .models import DocumentType


def max_document_bytes() -> int:
    return int(getattr(settings, "KYC_MAX_DOCUMENT_BYTES", 5 * 1024 * 1024))


def allowed_content_types() -> tuple[str, ...]:
    return tuple(
        getattr(
            settings,
            "KYC_ALLOWED_DOCUMENT_TYPES",
            ("application/pdf", "image/jpeg", "image/jpg", "image/png"),
        )
    )


def validate_attachment(upload: UploadedFile) -> UploadedFile:
    size = getattr(upload, "size", None) or 0
    if size > max_document_bytes():
        limit_mb = max_document_bytes() / (1024 * 1024)
        raise AttachmentRejected(f"File size must be less than {limit_mb:g}MB.")

    content_type = (getattr(upload, "content_type", "") or "").lower()
    if content_type not in allowed_content_types():
        raise AttachmentRejected("Only PDF, JPG, and PNG files are allowed.")
    return upload


@dataclass(frozen=True)
class StagedDocument:
    document_type: str
    file: UploadedFile

    @property
    def name(self) -> str:
        return self.file.name or ""

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""

    def release(self) -> None:
        self.file.close()


class AttachmentSet:
    def __init__(self) -> None:
        self._staged: dict[str, StagedDocument] = {}

    @classmethod
    def from_files(cls, files) -> AttachmentSet:
        """Stage every document-type key present in an upload mapping such as request.FILES."""
        staged = cls()
        errors: dict[str, list[str]] = {}
        for doc_type in DocumentType.values:
            upload = files.get(doc_type) if files else None
            if upload is None:
                continue
            try:
                staged.stage(doc_type, upload)
            except AttachmentRejected as e:
                errors[doc_type] = [str(msg) for msg in _messages(e.detail)]
        if errors:
            staged.clear()
            raise AttachmentRejected(errors)
        return staged

    def stage(self, document_type: str, upload: UploadedFile) -> StagedDocument:
        if document_type not in DocumentType.values:
            raise AttachmentRejected(f"Unknown document type: {document_type!r}.")
        validate_attachment(upload)

        doc = StagedDocument(document_type=document_type, file=upload)
        previous = self._staged.get(document_type)
        self._staged[document_type] = doc
        if previous is not None and previous.file is not upload:
            previous.release()
        return doc

    def remove(self, document_type: str) -> None:
        doc = self._staged.pop(document_type, None)
        if doc is not None:
            doc.release()

    def clear(self) -> None:
        for doc_type in list(self._staged):
            self.remove(doc_type)

    def get(self, document_type: str) -> StagedDocument | None:
        return self._staged.get(document_type)

    @property
    def types(self) -> list[str]:
        return list(self._staged)

    def __iter__(self) -> Iterator[StagedDocument]:
        return iter(list(self._staged.values()))

    def __len__(self) -> int:
        return len(self._staged)

    def __contains__(self, document_type: object) -> bool:
        return document_type in self._staged


def _messages(detail) -> list:
    if isinstance(detail, dict):
        out = []
        for v in detail.values():
            out.extend(_messages(v))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for v in detail:
            out.extend(_messages(v))
        return out
    return [detail]
