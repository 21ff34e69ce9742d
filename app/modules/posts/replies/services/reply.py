import uuid
from sqlalchemy.orm import Session

from app.modules.posts.models.post import Post
from app.modules.posts.replies.models.reply import Reply
from app.modules.posts.replies.schemas.reply import ReplyCreate
from app.modules.user_management.models.user import User

def create_reply(db: Session, post: Post, author: User, reply_in: ReplyCreate) -> Reply:
    """Add a reply, copying the author's current username and picture onto it"""
    reply = Reply(
        id=str(uuid.uuid4()),
        post_id=post.id,
        user_id=author.id,
        username=author.username,
        user_profile_pic=author.profile_pic,
        text=reply_in.text,
    )
    db.add(reply)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(reply)
    return reply

def delete_replies_for_post(db: Session, post_id: str) -> int:
    """Stage removal of every reply on a post; the caller commits"""
    return db.query(Reply).filter(Reply.post_id == post_id).delete(synchronize_session="fetch")
