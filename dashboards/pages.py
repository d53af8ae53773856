"""
Role-gated page resolution.

Every request decides its page from its own path and user; nothing about
navigation is stored between requests.
"""

from __future__ import annotations

from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

LOGIN = "login"
REGISTER = "register"
DASHBOARD = "dashboard"
VENDOR_REGISTER = "vendor_register"
VENDOR_STATUS = "vendor_status"
ADMIN_DASHBOARD = "admin_dashboard"

# URL name each page renders at
PAGE_URLS = {
    LOGIN: "login",
    REGISTER: "users:register",
    DASHBOARD: "dashboard",
    VENDOR_REGISTER: "vendor-register",
    VENDOR_STATUS: "vendor-status",
    ADMIN_DASHBOARD: "admin-dashboard",
}

VENDOR_PAGES = {
    "/vendor/register/": VENDOR_REGISTER,
    "/vendor/status/": VENDOR_STATUS,
}
ADMIN_PREFIX = "/admin/dashboard/"


def _normalize(path: str) -> str:
    path = (path or "/").split("?", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if not path.endswith("/"):
        path += "/"
    return path


def resolve_page(path: str, user) -> str:
    path = _normalize(path)

    if not getattr(user, "is_authenticated", False):
        return REGISTER if path == "/register/" else LOGIN

    if path in VENDOR_PAGES:
        return VENDOR_PAGES[path] if getattr(user, "is_vendor", False) else DASHBOARD

    if path.startswith(ADMIN_PREFIX):
        return ADMIN_DASHBOARD if getattr(user, "is_kyc_admin", False) else DASHBOARD

    return DASHBOARD


def page_required(page: str):
    """Render the view only when the request resolves to `page`; otherwise redirect to the page it does resolve to."""

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            resolved = resolve_page(request.path, request.user)
            if resolved != page:
                if resolved == LOGIN:
                    return redirect_to_login(request.get_full_path())
                return redirect(PAGE_URLS[resolved])
            return view(request, *args, **kwargs)

        return wrapper

    return decorator
