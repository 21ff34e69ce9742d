from fastapi import Request
from fastapi.responses import JSONResponse
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.deps import SESSION_USER_ID, is_public_route, read_session_token

logger = logging.getLogger("app")

class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Rejects every request to a non-allow-listed path that lacks a valid
    session token, matched route or not. The verified user id is left on
    ``request.state`` for ``resolve_session`` to load.
    """

    async def dispatch(self, request: Request, call_next):
        method = request.method
        path = request.url.path

        if is_public_route(method, path):
            return await call_next(request)

        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
        if not token:
            logger.warning(f"Protected endpoint {method} {path} accessed without session cookie")

        try:
            user_id = read_session_token(token)
        except AuthenticationError as e:
            return JSONResponse(status_code=e.status_code, content={"message": e.message})

        setattr(request.state, SESSION_USER_ID, user_id)
        return await call_next(request)
