from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.models.user_model import User
from jobsolution.schemas.user_schema import UserResponse, UserUpdate
from jobsolution.schemas.review_schema import ReviewListResponse
from jobsolution.services.auth_service import get_current_user
from jobsolution.services.user_service import get_my_info, update_user_info, get_my_reviews

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current profile",
    description="Returns the profile of the authenticated user."
)
def my_profile(current_user: User = Depends(get_current_user)):
    return get_my_info(current_user)


@router.put(
    "/me",
    response_model=UserResponse,
    summary="Update profile",
    description="""
    Updates phone, name or password of the authenticated user.
    Changing the password revokes existing refresh tokens.
    """
)
def update_my_profile(
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return update_user_info(db, current_user, data)


@router.get(
    "/me/reviews",
    response_model=ReviewListResponse,
    summary="My reviews",
    description="Lists the reviews written by the authenticated user in any moderation status."
)
def my_reviews(
    status: Optional[str] = Query(None, pattern="^(pending|approved|rejected)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_my_reviews(db, current_user, status, page, limit)
