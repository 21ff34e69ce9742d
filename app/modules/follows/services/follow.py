import logging
from typing import List
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.db.toggle import ToggleResult, toggle_association
from app.modules.follows.models.follow import UserFollow
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)

def get_following_ids(db: Session, user_id: str) -> List[str]:
    """IDs of every user that user_id follows"""
    rows = db.query(UserFollow.following_id).filter(UserFollow.follower_id == user_id).all()
    return [row.following_id for row in rows]

def toggle_follow(db: Session, follower: User, target_id: str) -> ToggleResult:
    """Follow target_id, or unfollow if the edge already exists"""
    if target_id == follower.id:
        raise ValidationError("You cannot follow/unfollow yourself")

    if not get_user(db, user_id=target_id):
        raise NotFoundError("User", resource_id=target_id)

    result = toggle_association(db, UserFollow, follower_id=follower.id, following_id=target_id)
    logger.info(f"User {follower.id} {'followed' if result is ToggleResult.ADDED else 'unfollowed'} {target_id}")
    return result
