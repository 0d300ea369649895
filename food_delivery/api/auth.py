"""
Authentication API router
"""
import logging
from datetime import timedelta
from typing import Any, Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from food_delivery.core.config import Settings
from food_delivery.core.database import get_db
from food_delivery.core.errors import Unauthorized, ValidationError
from food_delivery.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from food_delivery.models.user import User, RegisterRequest, LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["users"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="user/login", auto_error=False)

MIN_PASSWORD_LENGTH = 8

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        user.id,
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

@router.post("/register", response_model=TokenResponse)
def register_user(
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Any:
    """Register a new user"""
    email = user_data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("User already exists")
    if len(user_data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Please enter a strong password")
    if not user_data.name.strip():
        raise ValidationError("Name is required")

    user = User(
        name=user_data.name.strip(),
        email=email,
        hashed_password=get_password_hash(user_data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} registered")
    return {"success": True, "token": issue_token(user, settings)}

@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Any:
    """Login user and return access token"""
    user = db.query(User).filter(User.email == credentials.email.lower()).first()
    if not user or not verify_password(credentials.password, user.hashed_password):
        raise Unauthorized("Invalid credentials")
    return {"success": True, "token": issue_token(user, settings)}

def get_current_user_id(
    bearer: Optional[str] = Depends(oauth2_scheme),
    token: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Resolve the calling user from `Authorization: Bearer` or a `token` header"""
    credential = bearer or token
    if not credential:
        raise Unauthorized()
    return verify_token(credential, settings.SECRET_KEY, settings.JWT_ALGORITHM)
