from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.models.user_model import User
from jobsolution.schemas.review_schema import ReviewCreate, ReviewResponse, ReviewListResponse, UsefulMarkResponse
from jobsolution.services.auth_service import get_current_user, get_optional_user
from jobsolution.services.review_service import (
    get_review,
    list_company_reviews,
    create_review,
    mark_useful,
    unmark_useful,
)

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get(
    "/company/{company_id}",
    response_model=ReviewListResponse,
    summary="Company reviews",
    description="Lists the approved reviews of a company."
)
def company_reviews(
    company_id: int,
    city_id: Optional[int] = Query(None, ge=1),
    min_rating: Optional[float] = Query(None, ge=1, le=5),
    max_rating: Optional[float] = Query(None, ge=1, le=5),
    is_former_employee: Optional[bool] = Query(None),
    sort_by: str = Query("created_at", pattern="^(rating|created_at|useful_count)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    return list_company_reviews(
        db,
        company_id,
        current_user,
        page,
        limit,
        city_id=city_id,
        min_rating=min_rating,
        max_rating=max_rating,
        is_former_employee=is_former_employee,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get(
    "/{review_id}",
    response_model=ReviewResponse,
    summary="Review details",
    description="Returns an approved review. Pending and rejected reviews are not visible here."
)
def review_detail(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    return get_review(db, review_id, current_user)


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
    description="""
    Submits a review for moderation.
    The overall rating is the mean of the category ratings, rounded to one decimal.
    """
)
def submit_review(
    data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_review(db, current_user, data)


@router.post("/{review_id}/useful", response_model=UsefulMarkResponse, summary="Mark a review as useful")
def add_useful_mark(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return mark_useful(db, current_user, review_id)


@router.delete("/{review_id}/useful", response_model=UsefulMarkResponse, summary="Remove a useful mark")
def remove_useful_mark(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return unmark_useful(db, current_user, review_id)
