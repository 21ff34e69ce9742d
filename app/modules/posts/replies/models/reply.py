from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base, utcnow

class Reply(Base):
    __tablename__ = "replies"

    id = Column(String, primary_key=True, index=True)
    post_id = Column(String, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    text = Column(String(200), nullable=False)

    # Author snapshot taken when the reply is written; later profile edits do not touch it
    username = Column(String(50), nullable=False)
    user_profile_pic = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    post = relationship("Post", back_populates="replies")
