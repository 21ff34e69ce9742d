from pydantic import BaseModel

class LikeToggle(BaseModel):
    """Outcome of a like/unlike toggle"""
    message: str
    liked: bool
    like_count: int
