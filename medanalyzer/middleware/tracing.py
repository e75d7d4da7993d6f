import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_CTX_VAR: ContextVar[str] = ContextVar("trace_id", default="")
TRACE_HEADER = "x-trace-id"

_VALID_TRACE_ID = re.compile(r"[A-Za-z0-9._-]{1,128}")


def resolve_trace_id(incoming: str) -> str:
    """Reuse a caller-supplied trace id when it is safe to log, else mint one."""
    candidate = (incoming or "").strip()
    if _VALID_TRACE_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a trace id, continuing the caller's x-trace-id
    when one is sent. The id lands in a context variable for logs and error
    bodies and is echoed on the response.
    """
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER, ""))
        TRACE_ID_CTX_VAR.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)

        response.headers[TRACE_HEADER] = trace_id
        return response
