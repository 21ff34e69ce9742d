from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base

class UserFollow(Base):
    __tablename__ = "user_follows"

    id = Column(String, primary_key=True, index=True)
    follower_id = Column(String, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    following_id = Column(String, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    follower = relationship("User", foreign_keys=[follower_id], back_populates="following")
    following = relationship("User", foreign_keys=[following_id], back_populates="followers")

    # One edge per ordered pair; self-follows are rejected by the follow service
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_user_follows_pair"),
    )
