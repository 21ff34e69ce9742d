import logging
import uuid
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.modules.auth.schemas.auth import UserSignup
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user_by_username

logger = logging.getLogger("app")

def get_user_by_username_or_email(db: Session, username: str, email: str) -> Optional[User]:
    """Get a user holding either the username or the email"""
    return db.query(User).filter(or_(User.username == username, User.email == email)).first()

def signup_user(db: Session, user_in: UserSignup) -> User:
    """Create a new account; username and email must both be unused"""
    if get_user_by_username_or_email(db, user_in.username, user_in.email):
        raise ValidationError("User already exists")

    user = User(
        id=str(uuid.uuid4()),
        name=user_in.name,
        username=user_in.username,
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a signup with the same username or email
        db.rollback()
        raise ValidationError("User already exists")
    except Exception:
        db.rollback()
        raise
    db.refresh(user)

    logger.info(f"Created user {user.id} ({user.username})")
    return user

def authenticate_user(db: Session, username: str, password: str) -> User:
    """Check credentials; unknown user and wrong password look the same to the caller"""
    user = get_user_by_username(db, username=username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for username '{username}'")
        raise AuthenticationError("Invalid username or password")
    return user
