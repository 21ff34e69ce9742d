from pydantic import BaseModel

class FollowToggle(BaseModel):
    """Outcome of a follow/unfollow toggle"""
    message: str
    following: bool
