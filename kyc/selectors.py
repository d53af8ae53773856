from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from django.db.models import QuerySet

from .models import ApplicationStatus, AuditLogEntry, VendorApplication, VendorDocument

STATUS_FILTERS = ("all",) + tuple(ApplicationStatus.values)

T = TypeVar("T")


def applications_for(user) -> QuerySet:
    """Ownership-scoped applications, newest first: admins see every row, vendors their own."""
    qs = VendorApplication.objects.select_related("user", "reviewed_by").order_by("-created_at", "-id")
    if not getattr(user, "is_authenticated", False):
        return qs.none()
    if getattr(user, "is_kyc_admin", False):
        return qs
    return qs.filter(user=user)


def application_of(user) -> VendorApplication | None:
    if not getattr(user, "is_authenticated", False):
        return None
    return VendorApplication.objects.filter(user=user).select_related("reviewed_by").first()


def filter_by_status(applications: Iterable[T], status: str | None) -> list[T]:
    """Filter an already-fetched collection by status, keeping source order."""
    status = (status or "all").lower()
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status!r}")
    if status == "all":
        return list(applications)
    return [a for a in applications if a.status == status]


def status_counts(applications: Sequence) -> dict[str, int]:
    counts = {key: 0 for key in STATUS_FILTERS}
    for a in applications:
        counts["all"] += 1
        if a.status in counts:
            counts[a.status] += 1
    return counts


def documents_for(application: VendorApplication) -> QuerySet:
    return VendorDocument.objects.filter(application=application).order_by("uploaded_at", "id")


def audit_trail(application: VendorApplication) -> QuerySet:
    """Review history, newest first."""
    return (
        AuditLogEntry.objects.filter(application=application)
        .select_related("admin")
        .order_by("-created_at", "-id")
    )


def documents_visible_to(user) -> QuerySet:
    qs = VendorDocument.objects.select_related("application")
    if not getattr(user, "is_authenticated", False):
        return qs.none()
    if getattr(user, "is_kyc_admin", False):
        return qs
    return qs.filter(application__user=user)
