# uicms/common/middleware.py
from __future__ import annotations

import re

from django.utils.deprecation import MiddlewareMixin

from uicms.common.api.exceptions import ensure_request_id
from uicms.common.observability import bind_request_id, unbind_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Accept caller-supplied ids only if they look like an opaque token.
_VALID_RID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIdMiddleware(MiddlewareMixin):
    """
    Stamps every request with a request id and echoes it back as X-Request-ID.

    - Reuses an incoming X-Request-ID when it is well formed.
    - The same id is used in the error envelope and in log records.
    """

    def process_request(self, request):
        incoming = request.META.get("HTTP_X_REQUEST_ID", "")
        if incoming and _VALID_RID.match(incoming):
            request.request_id = incoming
        rid = ensure_request_id(request)
        request._request_id_token = bind_request_id(rid)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[REQUEST_ID_HEADER] = rid
        token = getattr(request, "_request_id_token", None)
        if token is not None:
            unbind_request_id(token)
            request._request_id_token = None
        return response
