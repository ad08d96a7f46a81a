import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.user_model import User
from jobsolution.models.review_model import Review, STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.schemas.review_schema import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewListResponse,
    ReviewCategoryRatingResponse,
    ReviewBenefitResponse,
    ReviewCompany,
    UsefulMarkResponse,
)
from jobsolution.schemas.city_schema import CityResponse
from jobsolution.schemas.lookup_schema import LookupResponse
from jobsolution.db import review_db, lookup_db
from jobsolution.db.company_db import get_company_by_id, update_rating
from jobsolution.db.city_db import get_city_by_id
from jobsolution.utils.pagination_util import paginate, pagination_meta
from jobsolution.utils.rating_util import mean_rating
from jobsolution.utils.time_util import utcnow

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------
# Serialization
# --------------------------------------------------------------------------
def to_review_response(review: Review, is_marked_as_useful: bool = False) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        user_id=review.user_id,
        company_id=review.company_id,
        position=review.position,
        employment_type_id=review.employment_type_id,
        employment_period_id=review.employment_period_id,
        city_id=review.city_id,
        rating=review.rating,
        pros=review.pros,
        cons=review.cons,
        is_former_employee=review.is_former_employee,
        is_recommended=review.is_recommended,
        status=review.status,
        moderation_comment=review.moderation_comment,
        useful_count=review.useful_count,
        created_at=review.created_at,
        updated_at=review.updated_at,
        approved_at=review.approved_at,
        category_ratings=[
            ReviewCategoryRatingResponse(category_id=r.category_id, category=r.category.name, rating=r.rating)
            for r in sorted(review.category_ratings, key=lambda r: r.category_id)
        ],
        benefits=[
            ReviewBenefitResponse(benefit_type_id=b.benefit_type_id, benefit=b.benefit_type.name)
            for b in sorted(review.benefits, key=lambda b: b.benefit_type_id)
        ],
        company=ReviewCompany.model_validate(review.company) if review.company else None,
        city=CityResponse.model_validate(review.city) if review.city else None,
        employment_type=LookupResponse.model_validate(review.employment_type) if review.employment_type else None,
        employment_period=LookupResponse.model_validate(review.employment_period) if review.employment_period else None,
        is_marked_as_useful=is_marked_as_useful,
    )


def to_review_responses(db: Session, reviews: List[Review], user: Optional[User] = None) -> List[ReviewResponse]:
    marked = set()
    if user is not None:
        marked = review_db.get_marked_review_ids(db, user.id, [r.id for r in reviews])
    return [to_review_response(r, r.id in marked) for r in reviews]


# --------------------------------------------------------------------------
# Public reads
# --------------------------------------------------------------------------
def get_approved_review(db: Session, review_id: int) -> Review:
    review = review_db.get_review_by_id(db, review_id)
    if review is None or review.status != STATUS_APPROVED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.REVIEW_NOT_FOUND)
    return review


def get_review(db: Session, review_id: int, user: Optional[User] = None) -> ReviewResponse:
    review = get_approved_review(db, review_id)
    marked = user is not None and review_db.is_marked_useful(db, user.id, review.id)
    return to_review_response(review, marked)


def list_company_reviews(
    db: Session,
    company_id: int,
    user: Optional[User],
    page: int,
    limit: int,
    **filters,
) -> ReviewListResponse:
    if get_company_by_id(db, company_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)

    query = review_db.list_company_reviews_query(db, company_id, **filters)
    reviews, total = paginate(query, page, limit)
    return ReviewListResponse(
        reviews=to_review_responses(db, reviews, user),
        pagination=pagination_meta(total, page, limit),
    )


# --------------------------------------------------------------------------
# Submission
# --------------------------------------------------------------------------
def create_review(db: Session, current_user: User, data: ReviewCreate) -> ReviewResponse:
    if get_company_by_id(db, data.company_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)
    if get_city_by_id(db, data.city_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.CITY_NOT_FOUND)
    if lookup_db.get_by_id(db, EmploymentType, data.employment_type_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.EMPLOYMENT_TYPE_NOT_FOUND)
    if lookup_db.get_by_id(db, EmploymentPeriod, data.employment_period_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.EMPLOYMENT_PERIOD_NOT_FOUND)

    category_ids = set(data.category_ratings)
    if len(lookup_db.get_by_ids(db, RatingCategory, list(category_ids))) != len(category_ids):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_RATING_CATEGORY)

    benefit_ids = set(data.benefit_type_ids)
    if len(lookup_db.get_by_ids(db, BenefitType, list(benefit_ids))) != len(benefit_ids):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_BENEFIT_TYPE)

    fields = data.model_dump(include={
        "company_id",
        "position",
        "employment_type_id",
        "employment_period_id",
        "city_id",
        "pros",
        "cons",
        "is_former_employee",
        "is_recommended",
    })
    with transaction(db):
        review = review_db.create_review(
            db,
            current_user.id,
            fields,
            rating=mean_rating(data.category_ratings.values()),
            category_ratings=data.category_ratings,
            benefit_type_ids=benefit_ids,
        )

    logger.info(f"User {current_user.id} submitted review {review.id} for company {review.company_id}")
    return to_review_response(review)


# --------------------------------------------------------------------------
# Useful marks
# --------------------------------------------------------------------------
def mark_useful(db: Session, current_user: User, review_id: int) -> UsefulMarkResponse:
    review = review_db.get_review_by_id(db, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.REVIEW_NOT_FOUND)
    if review.status != STATUS_APPROVED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.REVIEW_NOT_APPROVED)

    with transaction(db):
        review_db.add_useful_mark(db, current_user.id, review.id)
        review_db.refresh_useful_count(db, review)

    return UsefulMarkResponse(review_id=review.id, useful_count=review.useful_count, is_marked_as_useful=True)


def unmark_useful(db: Session, current_user: User, review_id: int) -> UsefulMarkResponse:
    review = review_db.get_review_by_id(db, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.REVIEW_NOT_FOUND)

    with transaction(db):
        if not review_db.remove_useful_mark(db, current_user.id, review.id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.USEFUL_MARK_NOT_FOUND)
        review_db.refresh_useful_count(db, review)

    return UsefulMarkResponse(review_id=review.id, useful_count=review.useful_count, is_marked_as_useful=False)


# --------------------------------------------------------------------------
# Moderation
# --------------------------------------------------------------------------
def get_review_or_404(db: Session, review_id: int) -> Review:
    review = review_db.get_review_by_id(db, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.REVIEW_NOT_FOUND)
    return review


def list_reviews_by_status(
    db: Session,
    review_status: str,
    page: int,
    limit: int,
    company_id: Optional[int] = None,
    sort_order: str = "asc",
) -> ReviewListResponse:
    query = review_db.list_reviews_by_status_query(db, review_status, company_id, sort_order)
    reviews, total = paginate(query, page, limit)
    return ReviewListResponse(
        reviews=[to_review_response(r) for r in reviews],
        pagination=pagination_meta(total, page, limit),
    )


def approve_review(db: Session, moderator: User, review_id: int, comment: Optional[str] = None) -> ReviewResponse:
    review = get_review_or_404(db, review_id)
    if review.status != STATUS_PENDING:
        logger.warning(f"Review {review_id} is already {review.status}, approval refused")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.REVIEW_ALREADY_MODERATED)

    with transaction(db):
        review.status = STATUS_APPROVED
        review.approved_at = utcnow()
        if comment:
            review.moderation_comment = comment
        update_rating(db, review.company_id)

    logger.info(f"Review {review.id} approved by user {moderator.id}")
    return to_review_response(review)


def reject_review(db: Session, moderator: User, review_id: int, comment: Optional[str]) -> ReviewResponse:
    review = get_review_or_404(db, review_id)
    if not comment or not comment.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.MODERATION_COMMENT_REQUIRED)
    if review.status != STATUS_PENDING:
        logger.warning(f"Review {review_id} is already {review.status}, rejection refused")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.REVIEW_ALREADY_MODERATED)

    with transaction(db):
        review.status = STATUS_REJECTED
        review.moderation_comment = comment.strip()

    logger.info(f"Review {review.id} rejected by user {moderator.id}")
    return to_review_response(review)


def admin_update_review(db: Session, admin: User, review_id: int, data: ReviewUpdate) -> ReviewResponse:
    review = get_review_or_404(db, review_id)
    was_approved = review.status == STATUS_APPROVED
    fields = data.model_dump(exclude_unset=True)

    with transaction(db):
        for key, value in fields.items():
            if value is None and key != "moderation_comment":
                continue
            setattr(review, key, value)
        if review.status == STATUS_APPROVED and not was_approved:
            review.approved_at = utcnow()
        elif review.status != STATUS_APPROVED:
            review.approved_at = None
        if was_approved or review.status == STATUS_APPROVED:
            update_rating(db, review.company_id)

    logger.info(f"Review {review.id} updated by admin {admin.id}")
    return to_review_response(review)


def admin_delete_review(db: Session, admin: User, review_id: int) -> dict:
    review = get_review_or_404(db, review_id)
    company_id = review.company_id

    with transaction(db):
        review_db.delete_review(db, review)
        update_rating(db, company_id)

    logger.info(f"Review {review_id} deleted by admin {admin.id}")
    return {"message": "Review deleted"}
