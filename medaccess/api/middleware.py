"""API middleware: correlation ID, caller principal, request audit."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from medaccess.core.context import correlation_id_ctx, principal_id_ctx

logger = logging.getLogger(__name__)

PRINCIPAL_HEADER = "X-Principal-ID"
CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class PrincipalContextMiddleware(BaseHTTPMiddleware):
    """Extract X-Principal-ID; return 400 if missing; attach to request.state and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        principal_id = request.headers.get(PRINCIPAL_HEADER)
        if not principal_id or not principal_id.strip():
            return JSONResponse(
                status_code=400,
                content={"detail": "X-Principal-ID header is required"},
            )
        request.state.principal_id = principal_id.strip()
        principal_id_ctx.set(request.state.principal_id)
        return await call_next(request)


class RequestAuditMiddleware(BaseHTTPMiddleware):
    """After response: log structured request line (correlation_id, principal_id, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        request_line = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "principal_id": getattr(request.state, "principal_id", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(request_line))
        return response
