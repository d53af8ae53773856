"""Vendor-side application submission."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import PermissionDenied, ValidationError

from core import metrics

from .attachments import AttachmentSet
from .exceptions import ApplicationAlreadyExists, DocumentStorageError, DocumentUploadFailed
from .models import BusinessType, VendorApplication, VendorDocument
from .storage import DocumentStore, document_key

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = ("gst_number", "pan_number")


def ensure_can_apply(user) -> None:
    if not getattr(user, "is_authenticated", False) or not getattr(user, "is_vendor", False):
        raise PermissionDenied("Only vendor accounts can submit a KYC application.")
    if VendorApplication.objects.filter(user=user).exists():
        raise ApplicationAlreadyExists()


def clean_application_data(data) -> dict:
    """Strip values and check every required field is present."""
    cleaned: dict[str, str] = {}
    errors: dict[str, list[str]] = {}
    for field in VendorApplication.REQUIRED_FIELDS:
        value = str(data.get(field) or "").strip()
        if not value:
            errors[field] = ["This field is required."]
        cleaned[field] = value
    if cleaned.get("business_type") and cleaned["business_type"] not in BusinessType.values:
        errors["business_type"] = [f"\"{cleaned['business_type']}\" is not a valid choice."]
    for field in OPTIONAL_FIELDS:
        cleaned[field] = str(data.get(field) or "").strip()
    if errors:
        raise ValidationError(errors)
    return cleaned


def submit_application(user, data, attachments: AttachmentSet | None = None, *, store: DocumentStore | None = None) -> VendorApplication:
    """
    Create the caller's pending application, then upload each staged document.

    The application row commits before any upload. Uploads run one at a time;
    the first failure stops the loop and raises DocumentUploadFailed, leaving
    the application with only the documents stored so far.
    """
    ensure_can_apply(user)
    fields = clean_application_data(data)
    attachments = attachments if attachments is not None else AttachmentSet()

    try:
        with transaction.atomic():
            app = VendorApplication.objects.create(user=user, **fields)
    except IntegrityError:
        # Lost a race with a concurrent submission by the same account
        raise ApplicationAlreadyExists()

    metrics.inc("kyc.submission")
    logger.info("application submitted id=%s user=%s documents=%s", app.pk, user.pk, attachments.types)

    if len(attachments):
        store = store or DocumentStore()
        uploaded: list[str] = []
        for doc in attachments:
            key = document_key(user.pk, app.pk, doc.document_type, doc.extension)
            try:
                with metrics.timer("kyc.document_upload_seconds", document_type=doc.document_type):
                    store.upload(key, doc.file)
            except DocumentStorageError:
                metrics.inc("kyc.document_upload_failed", document_type=doc.document_type)
                logger.exception(
                    "document upload failed application=%s type=%s uploaded=%s",
                    app.pk, doc.document_type, uploaded,
                )
                raise DocumentUploadFailed(app.pk, uploaded, doc.document_type)
            VendorDocument.objects.create(
                application=app,
                document_type=doc.document_type,
                storage_key=key,
                original_name=doc.name[:255],
                content_type=getattr(doc.file, "content_type", "") or "",
                size=doc.file.size or 0,
            )
            uploaded.append(doc.document_type)
            metrics.inc("kyc.document_uploaded", document_type=doc.document_type)

    return app
