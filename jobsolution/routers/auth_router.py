from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.schemas.common_schema import MessageResponse
from jobsolution.schemas.user_schema import (
    UserCreate,
    UserLogin,
    AuthResponse,
    Token,
    RefreshRequest,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    ResetPasswordRequest,
)
from jobsolution.services.auth_service import (
    register_user,
    login_user,
    refresh_tokens,
    logout_user,
    forgot_password,
    reset_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="""
    Creates a user account and returns the profile with an access/refresh token pair.
    """
)
def register(data: UserCreate, db: Session = Depends(get_db)):
    return register_user(db, data)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Exchanges email and password for an access/refresh token pair."
)
def login(data: UserLogin, db: Session = Depends(get_db)):
    return login_user(db, data)


@router.post(
    "/refresh",
    response_model=Token,
    summary="Rotate tokens",
    description="""
    Redeems a refresh token for a new token pair.
    The redeemed refresh token cannot be used again.
    """
)
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    return refresh_tokens(db, data.refresh_token)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
def logout(data: RefreshRequest, db: Session = Depends(get_db)):
    return logout_user(db, data.refresh_token)


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    summary="Request a password reset",
)
def request_password_reset(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    return forgot_password(db, data.email)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset password",
    description="Sets a new password using a reset token and revokes all refresh tokens of the user."
)
def confirm_password_reset(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    return reset_password(db, data)
