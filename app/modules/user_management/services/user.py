import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.security import get_password_hash
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserUpdate

logger = logging.getLogger(__name__)

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()

def update_user(db: Session, user: User, user_in: UserUpdate) -> User:
    """Update user; fields left out or blank are not touched"""
    update_data = {
        field: value
        for field, value in user_in.model_dump(exclude_unset=True).items()
        if value is not None
    }

    username = update_data.get("username")
    if username and username != user.username:
        taken = get_user_by_username(db, username)
        if taken and taken.id != user.id:
            raise ValidationError("Username is already taken", field="username")

    email = update_data.get("email")
    if email and email != user.email:
        taken = get_user_by_email(db, email)
        if taken and taken.id != user.id:
            raise ValidationError("Email is already taken", field="email")

    # Handle password update separately to ensure proper hashing
    password = update_data.pop("password", None)
    if password:
        update_data["password_hash"] = get_password_hash(password)

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError:
        # Username or email claimed by another request since the checks above
        db.rollback()
        raise ValidationError("Username or email is already taken")
    except Exception:
        db.rollback()
        raise
    db.refresh(user)

    logger.info(f"Updated user {user.id}: {sorted(update_data)}")
    return user
