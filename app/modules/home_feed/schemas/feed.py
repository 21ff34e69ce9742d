from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

from app.modules.posts.replies.schemas.reply import Reply

class FeedPost(BaseModel):
    """Feed item model returned to client"""
    id: str
    posted_by_id: str
    posted_by_username: str
    posted_by_profile_pic: Optional[str] = None
    text: str
    img: Optional[str] = None
    like_count: int
    created_at: datetime
    replies: List[Reply] = []
