"""
Review state machine for vendor applications.

    pending --approve--> approved
    pending --reject---> rejected

Both targets are terminal. Each transition locks the application row,
re-checks that it is still pending, then writes the new status and its audit
entry in one transaction, so concurrent reviewers cannot both succeed.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core import metrics

from .exceptions import InvalidTransition, ReviewPolicyError
from .models import ApplicationStatus, AuditLogEntry, VendorApplication

logger = logging.getLogger(__name__)

TRANSITIONS = {
    AuditLogEntry.Action.APPROVED: (ApplicationStatus.PENDING, ApplicationStatus.APPROVED),
    AuditLogEntry.Action.REJECTED: (ApplicationStatus.PENDING, ApplicationStatus.REJECTED),
}


def approve(application: VendorApplication, admin, comments: str = "") -> AuditLogEntry:
    return _transition(application, admin, AuditLogEntry.Action.APPROVED, comments=(comments or "").strip())


def reject(application: VendorApplication, admin, reason: str) -> AuditLogEntry:
    reason = (reason or "").strip()
    if not reason:
        raise ReviewPolicyError("A rejection reason is required.")
    return _transition(application, admin, AuditLogEntry.Action.REJECTED, comments=reason)


def _ensure_reviewer(admin) -> None:
    if not getattr(admin, "is_authenticated", False) or not getattr(admin, "is_kyc_admin", False):
        raise ReviewPolicyError("Only admins can review vendor applications.")


def _transition(application: VendorApplication, admin, action: str, *, comments: str) -> AuditLogEntry:
    _ensure_reviewer(admin)
    source, target = TRANSITIONS[action]

    with transaction.atomic():
        locked = VendorApplication.objects.select_for_update().get(pk=application.pk)
        if locked.status != source:
            raise InvalidTransition(
                f"Application {locked.pk} is {locked.status}; only {source} applications can be {action}."
            )

        locked.status = target
        locked.reviewed_by = admin
        locked.reviewed_at = timezone.now()
        update_fields = ["status", "reviewed_by", "reviewed_at", "updated_at"]
        if target == ApplicationStatus.REJECTED:
            locked.rejection_reason = comments
            update_fields.append("rejection_reason")
        locked.save(update_fields=update_fields)

        entry = AuditLogEntry.objects.create(
            application=locked,
            admin=admin,
            action=action,
            previous_status=source,
            new_status=target,
            comments=comments,
        )

    metrics.inc("kyc.review", action=action)
    logger.info("application %s %s by admin=%s", locked.pk, action, admin.pk)

    # Keep the caller's instance in step with the stored row
    for field in ("status", "rejection_reason", "reviewed_by_id", "reviewed_at", "updated_at"):
        setattr(application, field, getattr(locked, field))
    return entry
