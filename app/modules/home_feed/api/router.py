from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.home_feed.schemas.feed import FeedPost
from app.modules.home_feed.services.feed import get_home_feed

router = APIRouter()

@router.get("/feed", response_model=List[FeedPost])
def read_home_feed(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[FeedPost]:
    """Get the posts of everyone the current user follows, newest first"""
    return get_home_feed(db, current_user.id)
