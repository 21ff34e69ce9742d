from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

class ReplyCreate(BaseModel):
    text: str = Field(..., max_length=200)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text field is required")
        return v

class Reply(BaseModel):
    """Reply model returned to client; username and picture are the author's at reply time"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    username: str
    user_profile_pic: Optional[str] = None
    text: str
    created_at: datetime

class ReplyCreated(BaseModel):
    message: str
    reply: Reply
