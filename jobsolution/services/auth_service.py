import uuid
import logging
from datetime import timedelta, datetime, timezone
from typing import Optional
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from jobsolution.config.config import settings
from jobsolution.config.database import get_db, transaction, unique_transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.user_model import User
from jobsolution.schemas.user_schema import (
    UserCreate,
    UserLogin,
    UserResponse,
    AuthResponse,
    Token,
    ForgotPasswordResponse,
    ResetPasswordRequest,
)
from jobsolution.db.user_db import get_user_by_email, get_user_by_id, create_user, verify_password, hash_password
from jobsolution.db import token_db
from jobsolution.utils.time_util import utcnow

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# Tokens
def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "nbf": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def issue_tokens(db: Session, user: User) -> Token:
    refresh_token = str(uuid.uuid4())
    expires_at = utcnow() + timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES)
    token_db.create_refresh_token(db, user.id, refresh_token, expires_at)
    return Token(access_token=create_access_token(user), refresh_token=refresh_token)


# Registration
def register_user(db: Session, data: UserCreate) -> AuthResponse:
    if data.password != data.password_confirm:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.PASSWORD_MISMATCH)

    if get_user_by_email(db, data.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.EMAIL_ALREADY_EXISTS)

    with unique_transaction(db, ErrorMessages.EMAIL_ALREADY_EXISTS):
        user = create_user(
            db,
            email=data.email,
            password=data.password,
            phone=data.phone,
            first_name=data.first_name,
            last_name=data.last_name,
        )
        tokens = issue_tokens(db, user)

    logger.info(f"Registered user {user.id}")
    return AuthResponse(user=UserResponse.model_validate(user), tokens=tokens)


# Login
def authenticate_user(db: Session, email: str, password: str):
    user = get_user_by_email(db, email)
    if not user:
        return False
    if not verify_password(password, user.password_hash):
        return False
    return user


def login_user(db: Session, data: UserLogin) -> AuthResponse:
    user = authenticate_user(db, data.email, data.password)
    if not user:
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ErrorMessages.INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    with transaction(db):
        tokens = issue_tokens(db, user)
    return AuthResponse(user=UserResponse.model_validate(user), tokens=tokens)


def refresh_tokens(db: Session, refresh_token: str) -> Token:
    """Exchange a refresh token for a new token pair; the old token is consumed."""
    stored = token_db.get_refresh_token(db, refresh_token)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ErrorMessages.INVALID_REFRESH_TOKEN)

    if stored.expires_at <= utcnow():
        with transaction(db):
            token_db.delete_refresh_token(db, refresh_token)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ErrorMessages.EXPIRED_REFRESH_TOKEN)

    user = get_user_by_id(db, stored.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ErrorMessages.INVALID_REFRESH_TOKEN)

    with transaction(db):
        # a concurrent redemption may already have consumed the token
        if not token_db.delete_refresh_token(db, refresh_token):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=ErrorMessages.INVALID_REFRESH_TOKEN)
        tokens = issue_tokens(db, user)
    return tokens


def logout_user(db: Session, refresh_token: str) -> dict:
    with transaction(db):
        token_db.delete_refresh_token(db, refresh_token)
    return {"message": "Logged out"}


# Password reset
def forgot_password(db: Session, email: str) -> ForgotPasswordResponse:
    user = get_user_by_email(db, email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.USER_NOT_FOUND)

    reset_token = str(uuid.uuid4())
    expires_at = utcnow() + timedelta(hours=settings.PASSWORD_RESET_EXPIRE_HOURS)
    with transaction(db):
        token_db.create_reset_token(db, user.id, reset_token, expires_at)

    logger.info(f"Password reset requested for user {user.id}")
    # there is no mail delivery; outside release mode the token is handed back directly
    return ForgotPasswordResponse(
        message="Password reset instructions have been issued",
        reset_token=None if settings.is_release else reset_token,
    )


def reset_password(db: Session, data: ResetPasswordRequest) -> dict:
    if data.password != data.password_confirm:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.PASSWORD_MISMATCH)

    stored = token_db.get_reset_token(db, data.token)
    if stored is None or stored.expires_at <= utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_RESET_TOKEN)

    user = get_user_by_id(db, stored.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_RESET_TOKEN)

    with transaction(db):
        user.password_hash = hash_password(data.password)
        token_db.delete_user_reset_tokens(db, user.id)
        token_db.delete_user_refresh_tokens(db, user.id)

    logger.info(f"Password reset for user {user.id}")
    return {"message": "Password has been reset"}


# Current user
def resolve_user(db: Session, token: str) -> Optional[User]:
    try:
        payload = decode_access_token(token)
        user_id = payload.get("sub")
    except JWTError:
        return None
    if user_id is None or not str(user_id).isdigit():
        return None
    return get_user_by_id(db, int(user_id))


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ErrorMessages.INVALID_AUTHENTICATION,
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ErrorMessages.AUTHENTICATION_REQUIRED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = resolve_user(db, credentials.credentials)
    if user is None:
        raise credentials_exception
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    if credentials is None:
        return None
    return resolve_user(db, credentials.credentials)


def require_roles(*roles: str):
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ErrorMessages.INSUFFICIENT_ROLE)
        return current_user

    return role_checker
