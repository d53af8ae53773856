"""
Vendor KYC records.

- VendorApplication: one business registration per vendor account. Its
  `status` starts at pending and is only moved by `kyc.workflow`.
- VendorDocument: a KYC document stored in the object store; the row keeps
  the storage key, never the bytes.
- AuditLogEntry: append-only trail of review actions.

Documents and audit entries are write-once: saving an existing row or
deleting one raises `ImmutableRecordError`, and both reference their
application with PROTECT so no cascade can remove them.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

UserRef = settings.AUTH_USER_MODEL


class ImmutableRecordError(Exception):
    pass


class ApplicationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


class BusinessType(models.TextChoices):
    PROPRIETORSHIP = "proprietorship", "Proprietorship"
    PARTNERSHIP = "partnership", "Partnership"
    PRIVATE_LIMITED = "private_limited", "Private Limited"
    PUBLIC_LIMITED = "public_limited", "Public Limited"
    LLP = "llp", "LLP"
    OTHER = "other", "Other"


class DocumentType(models.TextChoices):
    GST = "gst", "GST Certificate"
    PAN = "pan", "PAN Card"
    REGISTRATION = "registration", "Business Registration"
    OTHER = "other", "Other"


class VendorApplication(models.Model):
    PENDING = ApplicationStatus.PENDING
    APPROVED = ApplicationStatus.APPROVED
    REJECTED = ApplicationStatus.REJECTED
    Status = ApplicationStatus

    REQUIRED_FIELDS = (
        "business_name",
        "business_type",
        "contact_number",
        "email",
        "address",
        "city",
        "state",
        "pincode",
    )

    user = models.OneToOneField(UserRef, on_delete=models.CASCADE, related_name="vendor_application")
    business_name = models.CharField(max_length=200)
    business_type = models.CharField(
        max_length=32, choices=BusinessType.choices, default=BusinessType.PROPRIETORSHIP
    )
    contact_number = models.CharField(max_length=32)
    email = models.EmailField(max_length=191)
    address = models.TextField()
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    pincode = models.CharField(max_length=16)
    gst_number = models.CharField(max_length=32, blank=True)
    pan_number = models.CharField(max_length=32, blank=True)

    status = models.CharField(
        max_length=16, choices=ApplicationStatus.choices, default=ApplicationStatus.PENDING, db_index=True
    )
    rejection_reason = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        UserRef, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(status=ApplicationStatus.REJECTED) | ~models.Q(rejection_reason=""),
                name="vendorapp_rejected_has_reason",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - representation only
        return f"{self.business_name} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING


class VendorDocument(models.Model):
    application = models.ForeignKey(
        VendorApplication, on_delete=models.PROTECT, related_name="documents"
    )
    document_type = models.CharField(max_length=16, choices=DocumentType.choices)
    storage_key = models.CharField(max_length=255, unique=True)
    original_name = models.CharField(max_length=255, blank=True)
    content_type = models.CharField(max_length=64, blank=True)
    size = models.PositiveIntegerField(default=0)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["uploaded_at", "id"]
        indexes = [
            models.Index(fields=["application", "document_type"], name="vendordoc_app_type_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - representation only
        return f"{self.get_document_type_display()} for application {self.application_id}"

    @property
    def extension(self) -> str:
        _, dot, ext = self.storage_key.rpartition(".")
        return ext if dot else ""

    @property
    def download_name(self) -> str:
        ext = self.extension
        return f"{self.document_type}_document.{ext}" if ext else f"{self.document_type}_document"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise ImmutableRecordError("Uploaded documents cannot be modified.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError("Uploaded documents cannot be deleted.")


class AuditLogEntry(models.Model):
    class Action(models.TextChoices):
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        UPDATED = "updated", "Updated"

    application = models.ForeignKey(
        VendorApplication, on_delete=models.PROTECT, related_name="audit_entries"
    )
    admin = models.ForeignKey(UserRef, on_delete=models.PROTECT, related_name="kyc_audit_entries")
    action = models.CharField(max_length=16, choices=Action.choices)
    previous_status = models.CharField(max_length=16, choices=ApplicationStatus.choices, blank=True)
    new_status = models.CharField(max_length=16, choices=ApplicationStatus.choices)
    comments = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "audit log entries"
        indexes = [
            models.Index(fields=["application", "created_at"], name="kycaudit_app_created_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - representation only
        return f"{self.action}: {self.previous_status or '-'} -> {self.new_status}"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise ImmutableRecordError("Audit log entries are append-only.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError("Audit log entries are append-only.")
