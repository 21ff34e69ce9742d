"""Account router: signup, login and logout, all reachable without a session"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.security import clear_auth_cookie, set_auth_cookie
from app.db.session import get_db
from app.modules.auth.schemas.auth import Message, UserLogin, UserSignup
from app.modules.auth.services.auth import authenticate_user, signup_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserAccount

router = APIRouter()

@router.post("/signup", response_model=UserAccount, status_code=status.HTTP_201_CREATED)
def signup(
    *,
    db: Session = Depends(get_db),
    user_in: UserSignup,
    response: Response,
) -> User:
    """Register a new user and start a session"""
    user = signup_user(db, user_in)
    set_auth_cookie(response, user.id)
    return user

@router.post("/login", response_model=UserAccount)
def login(
    *,
    db: Session = Depends(get_db),
    credentials: UserLogin,
    response: Response,
) -> User:
    """Check credentials and start a session"""
    user = authenticate_user(db, credentials.username, credentials.password)
    set_auth_cookie(response, user.id)
    return user

@router.post("/logout", response_model=Message)
def logout(response: Response) -> Message:
    """Drop the session cookie on the client"""
    clear_auth_cookie(response)
    return Message(message="Logged out successfully")
