from __future__ import annotations

import re

from django.utils.deprecation import MiddlewareMixin

from ev_core.common.api.exceptions import ensure_request_id

REQUEST_ID_HEADER = "X-Request-Id"

# Accept client supplied ids only when they look like an opaque token.
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{8,128}$")


class RequestIdMiddleware(MiddlewareMixin):
    """
    Stamps every request with request.request_id and echoes it back
    in the X-Request-Id response header.

    An incoming X-Request-Id is reused when it is well formed, so ids
    stay stable across a proxy -> API hop.
    """

    def process_request(self, request):
        incoming = request.META.get("HTTP_X_REQUEST_ID", "")
        if incoming and _SAFE_REQUEST_ID.match(incoming):
            request.request_id = incoming
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid and not response.has_header(REQUEST_ID_HEADER):
            response[REQUEST_ID_HEADER] = rid
        return response
