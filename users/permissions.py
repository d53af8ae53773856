# users/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission


class IsVendor(BasePermission):
    """Vendor role, read from the user row rather than anything the client sends."""

    message = "Vendor role required."

    def has_permission(self, request, view) -> bool:
        u = getattr(request, "user", None)
        if not u or not getattr(u, "is_authenticated", False):
            return False
        return bool(getattr(u, "is_vendor", False))


class IsKYCAdmin(BasePermission):
    """Reviewer operations; staff and superusers always qualify."""

    message = "Admin role required."

    def has_permission(self, request, view) -> bool:
        u = getattr(request, "user", None)
        if not u or not getattr(u, "is_authenticated", False):
            return False
        return bool(getattr(u, "is_kyc_admin", False))
