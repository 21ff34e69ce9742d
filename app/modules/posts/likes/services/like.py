import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.toggle import ToggleResult, toggle_association
from app.modules.posts.likes.models.like import PostLike
from app.modules.user_management.models.user import User

logger = logging.getLogger(__name__)

def get_like_count(db: Session, post_id: str) -> int:
    return db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar() or 0

def toggle_like(db: Session, post_id: str, user: User) -> ToggleResult:
    """Like the post, or unlike it if the user already did"""
    result = toggle_association(db, PostLike, post_id=post_id, user_id=user.id)
    logger.info(f"User {user.id} {'liked' if result is ToggleResult.ADDED else 'unliked'} post {post_id}")
    return result

def delete_likes_for_post(db: Session, post_id: str) -> int:
    """Stage removal of every like on a post; the caller commits"""
    return db.query(PostLike).filter(PostLike.post_id == post_id).delete(synchronize_session="fetch")
