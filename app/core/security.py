# Implements security-related functionality:
# JWT session token generation and verification
# Session cookie issuance and clearing
# Password hashing and verification using bcrypt
# Provides core security functions used by the auth module and the session gate

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union
import logging

from fastapi import Response
from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import InvalidTokenError

logger = logging.getLogger("app")

# Claim carrying the user id; the token holds nothing else besides expiry
USER_ID_CLAIM = "userId"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {USER_ID_CLAIM: str(subject), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> str:
    """
    Verify signature and expiry (no leeway) and return the user id claim.

    Raises InvalidTokenError for anything that is not a well-formed,
    unexpired token signed with our secret and carrying a user id.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "leeway": 0},
        )
    except JWTError as e:
        logger.warning(f"JWT verification error: {e}")
        raise InvalidTokenError(context={"reason": str(e)})

    user_id = payload.get(USER_ID_CLAIM)
    if not isinstance(user_id, str) or not user_id:
        logger.warning(f"Token payload missing '{USER_ID_CLAIM}' claim")
        raise InvalidTokenError(context={"reason": "missing user id claim"})

    return user_id

def set_auth_cookie(response: Response, user_id: str) -> str:
    """Issue a session token for the user and attach it as the session cookie"""
    token = create_access_token(user_id)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.access_token_expire_seconds,
        expires=settings.access_token_expire_seconds,
        path="/",
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )
    return token

def clear_auth_cookie(response: Response) -> None:
    # Only the client copy goes away; the token itself stays valid until it expires
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
