from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError
from app.db.session import get_db
from app.db.toggle import ToggleResult
from app.deps import get_current_user
from app.modules.auth.schemas.auth import Message
from app.modules.user_management.models.user import User
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostCreate, PostCreated, PostDetail
from app.modules.posts.services.post import (
    get_post, get_post_with_relations, create_post, delete_post,
    build_post_schema, build_post_detail,
)
from app.modules.posts.likes.schemas.like import LikeToggle
from app.modules.posts.likes.services.like import toggle_like, get_like_count
from app.modules.posts.replies.schemas.reply import Reply, ReplyCreate, ReplyCreated
from app.modules.posts.replies.services.reply import create_reply

router = APIRouter()

def _validate_post(db: Session, post_id: str) -> Post:
    """Validate post exists and return it or raise NotFoundError"""
    post = get_post(db, post_id=post_id)
    if not post:
        raise NotFoundError("Post", resource_id=post_id)
    return post

@router.post("/create", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
) -> PostCreated:
    """
    Create new post.
    """
    post = create_post(db, post_in, current_user)
    return PostCreated(message="Post created successfully", post=build_post_schema(post, current_user))

@router.get("/{post_id}", response_model=PostDetail)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
) -> PostDetail:
    """
    Get post by ID, with its likers and replies. No session needed.
    """
    post = get_post_with_relations(db, post_id=post_id)
    if not post:
        raise NotFoundError("Post", resource_id=post_id)
    return build_post_detail(post)

@router.delete("/{post_id}", response_model=Message)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Message:
    """
    Delete a post and all associated data (likes and replies).
    Only the author may do this.
    """
    post = _validate_post(db, post_id)

    if post.posted_by_id != current_user.id:
        raise AuthorizationError("User not authorized to delete this post")

    delete_post(db, post)
    return Message(message="Post deleted successfully")

@router.post("/like/{post_id}", response_model=LikeToggle)
def like_unlike_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> LikeToggle:
    """Like a post, or unlike it if already liked"""
    _validate_post(db, post_id)

    liked = toggle_like(db, post_id, current_user) is ToggleResult.ADDED
    return LikeToggle(
        message="Post liked successfully." if liked else "Post unliked successfully.",
        liked=liked,
        like_count=get_like_count(db, post_id),
    )

@router.post("/reply/{post_id}", response_model=ReplyCreated, status_code=status.HTTP_201_CREATED)
def reply_to_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    reply_in: ReplyCreate,
    current_user: User = Depends(get_current_user),
) -> ReplyCreated:
    """Reply to a post"""
    post = _validate_post(db, post_id)

    reply = create_reply(db, post, current_user, reply_in)
    return ReplyCreated(message="Reply added successfully", reply=Reply.model_validate(reply))
