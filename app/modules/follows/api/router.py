from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.toggle import ToggleResult
from app.deps import get_current_user
from app.modules.follows.schemas.follow import FollowToggle
from app.modules.follows.services.follow import toggle_follow
from app.modules.user_management.models.user import User

router = APIRouter()

@router.post("/follow/{user_id}", response_model=FollowToggle)
def follow_unfollow_user(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    current_user: User = Depends(get_current_user),
) -> FollowToggle:
    """Follow a user, or unfollow if already following"""
    if toggle_follow(db, current_user, user_id) is ToggleResult.ADDED:
        return FollowToggle(message="Followed successfully", following=True)
    return FollowToggle(message="Unfollowed successfully", following=False)
