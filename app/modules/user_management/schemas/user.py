from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

class UserUpdate(BaseModel):
    """Profile edit; blank or missing fields keep their current value"""
    name: Optional[str] = None
    username: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    bio: Optional[str] = None
    profile_pic: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Trim strings; a blank one counts as not given"""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

class UserAccount(BaseModel):
    """User model returned by signup and login"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    username: str
    email: str

class UserDetails(UserAccount):
    """User model returned after a profile edit"""
    bio: str = ""
    profile_pic: str = ""

class UserProfile(UserDetails):
    """Public profile, looked up by username"""
    created_at: datetime

class UserSnapshot(BaseModel):
    """Minimal author block embedded in posts and like lists"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    profile_pic: Optional[str] = None
