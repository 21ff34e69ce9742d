from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    posted_by_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(String(500), nullable=False)
    img = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    author = relationship("User")

    # Replies belong to the post and go with it; likes are removed explicitly by delete_post
    replies = relationship(
        "Reply",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Reply.created_at",
    )
    likes = relationship("PostLike", back_populates="post", passive_deletes="all")
