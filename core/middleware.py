# core/middleware.py
from __future__ import annotations

import uuid


class RequestIDMiddleware:
    """Attach a request ID and echo it back in the response as X-Request-ID."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        rid = request.META.get("HTTP_X_REQUEST_ID") or uuid.uuid4().hex
        request.request_id = rid
        resp = self.get_response(request)
        resp.headers["X-Request-ID"] = rid
        return resp
