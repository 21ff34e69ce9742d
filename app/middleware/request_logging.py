from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

from app.deps import SESSION_USER_ID, is_public_route

logger = logging.getLogger("app")

def _session_outcome(request: Request, status_code: int) -> str:
    """How the session gate treated the request"""
    if is_public_route(request.method, request.url.path):
        return "public"
    user_id = getattr(request.state, SESSION_USER_ID, None)
    if user_id is None:
        return f"rejected {status_code}"
    return f"user {user_id}"

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: one line per response, with the session outcome"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.debug(f"Request: {method} {path} {request.url.query}")

        response = await call_next(request)

        process_time = time.time() - start_time
        line = (
            f"{method} {path} -> {response.status_code} in {process_time:.4f}s "
            f"[{_session_outcome(request, response.status_code)}]"
        )

        # Auth failures stand out in the log
        if response.status_code in (401, 403):
            logger.warning(f"Auth error: {line}")
        else:
            logger.info(line)

        return response
