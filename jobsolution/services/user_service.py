import logging
from typing import Optional
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction
from jobsolution.models.user_model import User
from jobsolution.schemas.user_schema import UserResponse, UserUpdate
from jobsolution.schemas.review_schema import ReviewListResponse
from jobsolution.db.user_db import hash_password
from jobsolution.db.review_db import list_user_reviews_query
from jobsolution.db import token_db
from jobsolution.services.review_service import to_review_responses
from jobsolution.utils.pagination_util import paginate, pagination_meta

logger = logging.getLogger(__name__)


def get_my_info(current_user: User) -> UserResponse:
    return UserResponse.model_validate(current_user)


def update_user_info(db: Session, current_user: User, data: UserUpdate) -> UserResponse:
    fields = data.model_dump(exclude_unset=True)

    with transaction(db):
        for key in ("phone", "first_name", "last_name"):
            if key in fields:
                setattr(current_user, key, fields[key])
        if fields.get("password"):
            current_user.password_hash = hash_password(fields["password"])
            # other sessions must log in again after a password change
            token_db.delete_user_refresh_tokens(db, current_user.id)

    db.refresh(current_user)
    logger.info(f"Updated profile of user {current_user.id}")
    return UserResponse.model_validate(current_user)


def get_my_reviews(
    db: Session,
    current_user: User,
    status: Optional[str],
    page: int,
    limit: int,
) -> ReviewListResponse:
    query = list_user_reviews_query(db, current_user.id, status)
    reviews, total = paginate(query, page, limit)
    return ReviewListResponse(
        reviews=to_review_responses(db, reviews, current_user),
        pagination=pagination_meta(total, page, limit),
    )
