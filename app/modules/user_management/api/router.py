from typing import Any
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserDetails, UserProfile, UserUpdate
from app.modules.user_management.services.user import get_user_by_username, update_user

router = APIRouter()
logger = logging.getLogger("app")

@router.post("/update/{user_id}", response_model=UserDetails)
def update_user_by_id(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Update the caller's own profile"""
    if current_user.id != user_id:
        logger.warning(f"User {current_user.id} tried to update user {user_id}")
        raise AuthorizationError("You are not authorized to update this user.")

    return update_user(db, current_user, user_in)

@router.get("/profile/{username}", response_model=UserProfile)
def read_user_profile(
    username: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get a specific user by username"""
    user = get_user_by_username(db, username=username)
    if not user:
        raise NotFoundError("User")

    return user
