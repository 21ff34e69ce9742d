"""
Session gate.

The gate has two halves. ``SessionGateMiddleware`` runs ahead of routing:
for every path outside the allow-list it verifies the session token and
answers 401 itself, so nothing past it (handler, 404 or 405) is reached
without a valid token. The verified user id is left on ``request.state``.

``resolve_session`` is installed as an application-wide dependency and
turns that id into the ``User``, or raises 404 when the account is gone.
Handlers that need the caller declare
``current_user: User = Depends(get_current_user)`` and get that same
object; FastAPI caches the dependency per request, so the user is loaded
exactly once.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.core.exceptions import AuthenticationError, NotFoundError
from app.db.session import get_db
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

logger = logging.getLogger("app")

# Routes that never touch the token path
PUBLIC_PATHS = frozenset({
    f"{settings.API_PREFIX}/users/login",
    f"{settings.API_PREFIX}/users/logout",
    f"{settings.API_PREFIX}/users/signup",
})
PUBLIC_GET_PREFIX = f"{settings.API_PREFIX}/posts/"
# Lives under the public posts prefix but is per-user
PRIVATE_GET_PATHS = frozenset({f"{settings.API_PREFIX}/posts/feed"})

def is_public_route(method: str, path: str) -> bool:
    """Static allow-list check, evaluated before any token work"""
    path = path.lower()
    if path in PUBLIC_PATHS:
        return True
    return (
        method.upper() == "GET"
        and path.startswith(PUBLIC_GET_PREFIX)
        and path.rstrip("/") not in PRIVATE_GET_PATHS
    )

# request.state attribute carrying the verified user id
SESSION_USER_ID = "session_user_id"

def read_session_token(token: Optional[str]) -> str:
    """
    Verify a session token and return the user id it was issued for.

    Missing token -> AuthenticationError (401)
    Bad signature / expired / malformed -> InvalidTokenError (401)
    """
    if not token:
        raise AuthenticationError("Unauthorized - token emptied - please log in")
    return security.decode_access_token(token)

def load_session_user(db: Session, user_id: str) -> User:
    """Valid token, user gone -> NotFoundError (404)"""
    user = get_user(db, user_id=user_id)
    if not user:
        logger.warning(f"Valid token for missing user {user_id}")
        raise NotFoundError("User", resource_id=user_id)
    return user

def resolve_session(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """
    None for allow-listed routes, otherwise the caller
    """
    if is_public_route(request.method, request.url.path):
        return None

    user_id = getattr(request.state, SESSION_USER_ID, None)
    if user_id is None:
        # Not verified by SessionGateMiddleware (app mounted without it)
        user_id = read_session_token(request.cookies.get(settings.AUTH_COOKIE_NAME))

    return load_session_user(db, user_id)

def get_current_user(user: Optional[User] = Depends(resolve_session)) -> User:
    """
    Dependency for handlers that act on behalf of the caller
    """
    if user is None:
        raise AuthenticationError()
    return user
