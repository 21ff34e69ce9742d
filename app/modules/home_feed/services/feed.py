from typing import List
from sqlalchemy import desc, func
from sqlalchemy.orm import Session, selectinload

from app.modules.follows.services.follow import get_following_ids
from app.modules.home_feed.schemas.feed import FeedPost
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.models.post import Post as PostModel
from app.modules.posts.replies.schemas.reply import Reply as ReplySchema
from app.modules.user_management.models.user import User as UserModel

def get_home_feed(db: Session, user_id: str) -> List[FeedPost]:
    """Posts by everyone user_id follows, newest first"""
    following_ids = get_following_ids(db, user_id)
    if not following_ids:
        return []

    rows = _build_feed_query(db, following_ids).all()
    return [_create_feed_post(post, author, like_count) for post, author, like_count in rows]

def _build_feed_query(db: Session, author_ids: List[str]):
    """Build query for fetching feed posts with their author and like count"""
    like_counts = (
        db.query(PostLike.post_id, func.count(PostLike.id).label("like_count"))
        .group_by(PostLike.post_id)
        .subquery()
    )
    return (
        db.query(
            PostModel,
            UserModel,
            func.coalesce(like_counts.c.like_count, 0).label("like_count"),
        )
        .join(UserModel, UserModel.id == PostModel.posted_by_id)
        .outerjoin(like_counts, like_counts.c.post_id == PostModel.id)
        .options(selectinload(PostModel.replies))
        .filter(PostModel.posted_by_id.in_(author_ids))
        .order_by(desc(PostModel.created_at), desc(PostModel.id))
    )

def _create_feed_post(post: PostModel, author: UserModel, like_count: int) -> FeedPost:
    """Transform a query row into a feed post"""
    return FeedPost(
        id=post.id,
        posted_by_id=post.posted_by_id,
        posted_by_username=author.username,
        posted_by_profile_pic=author.profile_pic,
        text=post.text,
        img=post.img,
        like_count=like_count,
        created_at=post.created_at,
        replies=[ReplySchema.model_validate(reply) for reply in post.replies],
    )
