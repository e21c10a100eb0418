import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Context variables: per-request values for log correlation only.
# Authorization never reads these; the principal is passed explicitly.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
user_id_var: ContextVar[str] = ContextVar("user_id", default="-")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every incoming request.

    Reads X-Request-ID from the request header if provided by the caller,
    otherwise generates a new UUID. Injects it into the response headers too
    so the caller can correlate their logs with ours.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_token = request_id_var.set(request_id)
        user_id_token = user_id_var.set("-")
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(request_id_token)
            user_id_var.reset(user_id_token)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestContextLogFilter(logging.Filter):
    """Inject the current request ID and caller id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.user_id = user_id_var.get()
        return True
