# Import all models here so metadata.create_all() can see them
from app.db.session import Base

# Import all models below
from app.modules.user_management.models.user import User
from app.modules.follows.models.follow import UserFollow
from app.modules.posts.models.post import Post
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.replies.models.reply import Reply
