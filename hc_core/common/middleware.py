from __future__ import annotations

import logging

from django.utils.deprecation import MiddlewareMixin

from hc_core.common.api.exceptions import ensure_request_id

logger = logging.getLogger(__name__)


class RequestIdMiddleware(MiddlewareMixin):
    """
    Attaches request.request_id (incoming X-Request-Id is honoured) and echoes
    it back in the response, so error envelopes and log lines correlate.
    """

    HEADER = "X-Request-Id"
    META_KEY = "HTTP_X_REQUEST_ID"

    def process_request(self, request):
        incoming = request.META.get(self.META_KEY)
        if incoming:
            request.request_id = incoming[:64]
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[self.HEADER] = rid
        if response.status_code >= 500:
            logger.error("%s %s -> %s (request_id=%s)", request.method, request.path, response.status_code, rid)
        return response
