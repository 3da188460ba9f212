"""
XYFORA Backend — Request ID Middleware
=======================================

What:  Assigns a correlation id to each request and echoes it in the
       `X-Request-ID` response header.
How:   Accepts a client-supplied id when it is short and printable,
       otherwise generates an 8-character one. The id is stored in a
       ContextVar (read by loggers and exception handlers) and on
       `request.state`.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def _new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "")
        # Client ids end up in logs; anything unusual is replaced
        rid = supplied if _CLIENT_ID_PATTERN.fullmatch(supplied) else _new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
