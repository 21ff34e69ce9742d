from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.modules.posts.replies.schemas.reply import Reply
from app.modules.user_management.schemas.user import UserSnapshot

MAX_POST_LENGTH = 500

class PostCreate(BaseModel):
    text: str = Field(..., description="Post body, up to 500 characters")
    img: Optional[str] = None

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required.")
        if len(v) > MAX_POST_LENGTH:
            raise ValueError(f"Text must be less than or equal to {MAX_POST_LENGTH} characters.")
        return v

class Post(BaseModel):
    """Post model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    img: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    posted_by: UserSnapshot
    likes: List[UserSnapshot] = []

class PostDetail(Post):
    """Single post with the users who liked it and its replies"""
    replies: List[Reply] = []

class PostCreated(BaseModel):
    message: str
    post: Post
