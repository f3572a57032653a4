"""Access log plus request-id propagation.

An inbound X-Request-ID (from a proxy or the frontend) is kept, otherwise a
fresh req_xxxxxxxxxxxx id is minted. The id lands on request.state for the
ApiResponse envelope and is echoed back as the X-Request-ID response header.

    INFO rush.request POST /api/v1/bets/7/resolve 200 41ms req_a1b2c3d4e5f6
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.rush_common.response import new_request_id

logger = logging.getLogger("rush.request")

_HEADER = "X-Request-ID"
_MAX_INBOUND_LEN = 64


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        inbound = request.headers.get(_HEADER, "")
        request_id = inbound if 0 < len(inbound) <= _MAX_INBOUND_LEN else new_request_id()
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000
        response.headers[_HEADER] = request_id

        if response.status_code >= 500:
            level = logging.WARNING
        elif response.status_code >= 400:
            level = logging.INFO
        else:
            level = logging.DEBUG if request.method == "GET" else logging.INFO
        logger.log(
            level, "%s %s %d %.0fms %s",
            request.method, request.url.path, response.status_code, took_ms, request_id,
        )
        return response
