import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.user_model import User, ROLE_ADMIN
from jobsolution.models.company_model import Company
from jobsolution.models.review_model import Review, STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED
from jobsolution.models.city_model import City
from jobsolution.models.industry_model import Industry
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.schemas.admin_schema import StatisticsResponse
from jobsolution.schemas.user_schema import UserResponse, UserListResponse
from jobsolution.db import user_db, review_db
from jobsolution.db.company_db import update_rating
from jobsolution.utils.pagination_util import paginate, pagination_meta

logger = logging.getLogger(__name__)


def count(db: Session, model, *criteria) -> int:
    return db.query(func.count(model.id)).filter(*criteria).scalar() or 0


def get_statistics(db: Session) -> StatisticsResponse:
    return StatisticsResponse(
        users_count=count(db, User),
        companies_count=count(db, Company),
        reviews_count=count(db, Review),
        pending_reviews=count(db, Review, Review.status == STATUS_PENDING),
        approved_reviews=count(db, Review, Review.status == STATUS_APPROVED),
        rejected_reviews=count(db, Review, Review.status == STATUS_REJECTED),
        cities_count=count(db, City),
        industries_count=count(db, Industry),
        benefit_types_count=count(db, BenefitType),
        rating_categories_count=count(db, RatingCategory),
        employment_types_count=count(db, EmploymentType),
        employment_periods_count=count(db, EmploymentPeriod),
    )


# --------------------------------------------------------------------------
# Users
# --------------------------------------------------------------------------
def list_users(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    role: Optional[str] = None,
) -> UserListResponse:
    query = user_db.list_users_query(db, search, role)
    users, total = paginate(query, page, limit)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        pagination=pagination_meta(total, page, limit),
    )


def get_user_or_404(db: Session, user_id: int) -> User:
    user = user_db.get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.USER_NOT_FOUND)
    return user


def get_user(db: Session, user_id: int) -> UserResponse:
    return UserResponse.model_validate(get_user_or_404(db, user_id))


def update_user_role(db: Session, admin: User, user_id: int, role: str) -> UserResponse:
    user = get_user_or_404(db, user_id)

    if user.role == ROLE_ADMIN and role != ROLE_ADMIN and user_db.count_admins(db) <= 1:
        logger.warning(f"Refused to demote the last admin (user {user.id})")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.LAST_ADMIN)

    with transaction(db):
        user.role = role

    logger.info(f"Admin {admin.id} changed role of user {user.id} to {role}")
    return UserResponse.model_validate(user)


def delete_user(db: Session, admin: User, user_id: int) -> dict:
    """Delete a user with everything they own and refresh the affected aggregates."""
    user = get_user_or_404(db, user_id)
    if user.role == ROLE_ADMIN and user_db.count_admins(db) <= 1:
        logger.warning(f"Refused to delete the last admin (user {user.id})")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.LAST_ADMIN)
    if admin.id == user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.CANNOT_DELETE_SELF)

    affected_companies = review_db.get_approved_company_ids(db, user.id)
    marked_reviews = [r for r in review_db.get_marked_reviews(db, user.id) if r.user_id != user.id]

    with transaction(db):
        user_db.delete_user(db, user)
        for review in marked_reviews:
            review_db.refresh_useful_count(db, review)
        for company_id in sorted(affected_companies):
            update_rating(db, company_id)

    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return {"message": "User deleted"}
