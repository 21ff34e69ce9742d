from typing import Optional
import uuid
import logging
from sqlalchemy.orm import Session, selectinload

from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostDetail
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.likes.services.like import delete_likes_for_post
from app.modules.posts.replies.schemas.reply import Reply as ReplySchema
from app.modules.posts.replies.services.reply import delete_replies_for_post
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSnapshot

logger = logging.getLogger(__name__)

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_post_with_relations(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID with author, likers and replies loaded"""
    return (
        db.query(Post)
        .options(
            selectinload(Post.author),
            selectinload(Post.likes).selectinload(PostLike.user),
            selectinload(Post.replies),
        )
        .filter(Post.id == post_id)
        .first()
    )

def create_post(db: Session, post_in: PostCreate, author: User) -> Post:
    """Create new post"""
    logger.info(f"Creating post for author ID: {author.id}")
    post = Post(
        id=str(uuid.uuid4()),
        posted_by_id=author.id,
        text=post_in.text,
        img=post_in.img,
    )
    db.add(post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(post)
    return post

def delete_post(db: Session, post: Post) -> None:
    """
    Delete post and all associated likes and replies.
    Likes, then replies, then the post itself go out in a single commit,
    so either all three steps land or none does.
    """
    logger.info(f"Deleting post with ID: {post.id}")
    try:
        likes = delete_likes_for_post(db, post.id)
        replies = delete_replies_for_post(db, post.id)
        db.delete(post)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Deleted post {post.id} with {likes} likes and {replies} replies")

def build_post_schema(post: Post, author: User) -> PostSchema:
    """Create a post schema object from a post model"""
    return PostSchema(
        id=post.id,
        text=post.text,
        img=post.img,
        created_at=post.created_at,
        updated_at=post.updated_at,
        posted_by=UserSnapshot.model_validate(author),
        likes=[],
    )

def build_post_detail(post: Post) -> PostDetail:
    """Create a detailed post schema from a post loaded by get_post_with_relations"""
    return PostDetail(
        id=post.id,
        text=post.text,
        img=post.img,
        created_at=post.created_at,
        updated_at=post.updated_at,
        posted_by=UserSnapshot.model_validate(post.author),
        likes=[UserSnapshot.model_validate(like.user) for like in post.likes],
        replies=[ReplySchema.model_validate(reply) for reply in post.replies],
    )
