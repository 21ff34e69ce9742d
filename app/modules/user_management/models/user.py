from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    bio = Column(Text, nullable=False, default="")
    profile_pic = Column(String, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Edges where this user is the follower / the one being followed.
    # Neither side cascades: removing a user must not fan out through both paths.
    following = relationship(
        "UserFollow",
        foreign_keys="UserFollow.follower_id",
        back_populates="follower",
        passive_deletes="all",
    )
    followers = relationship(
        "UserFollow",
        foreign_keys="UserFollow.following_id",
        back_populates="following",
        passive_deletes="all",
    )
