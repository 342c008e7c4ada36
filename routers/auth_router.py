import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_token, get_current_user
from core.database import get_db
from core.exceptions import AuthenticationError
from core.security import verify_password
from crud.token_crud import issue_token, revoke_token
from crud.user_crud import create_user, get_user_by_email
from schemas.auth_schema import AuthTokenResponse, LoginRequest, MessageResponse
from schemas.user_schema import UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=AuthTokenResponse, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    """
    Create an account and issue its first bearer token.
    """
    user = create_user(db, payload)
    t = issue_token(db, user.id)
    return AuthTokenResponse(token=t.token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthTokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """
    Check email/password and issue a new bearer token.
    """
    user = get_user_by_email(db, body.email)
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %s", body.email)
        raise AuthenticationError("Invalid credentials")

    t = issue_token(db, user.id)
    return AuthTokenResponse(token=t.token, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(t = Depends(get_current_token), db: Session = Depends(get_db)):
    revoke_token(db, t.token)
    return MessageResponse(message="Successfully logged out")


@router.get("/me", response_model=UserResponse)
def get_me(current_user = Depends(get_current_user)):
    return current_user
