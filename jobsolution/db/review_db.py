from typing import Dict, Iterable, List, Optional, Set
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from jobsolution.models.review_model import (
    Review,
    ReviewCategoryRating,
    ReviewBenefit,
    UsefulMark,
    STATUS_APPROVED,
    STATUS_PENDING,
)

UPSERT_DIALECTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}

REVIEW_SORT_FIELDS = {
    "rating": Review.rating,
    "created_at": Review.created_at,
    "useful_count": Review.useful_count,
}


def get_review_by_id(db: Session, review_id: int) -> Optional[Review]:
    return db.query(Review).filter(Review.id == review_id).first()


def create_review(
    db: Session,
    user_id: int,
    data: dict,
    rating: float,
    category_ratings: Dict[int, float],
    benefit_type_ids: Iterable[int],
) -> Review:
    review = Review(user_id=user_id, rating=rating, status=STATUS_PENDING, useful_count=0, **data)
    review.category_ratings = [
        ReviewCategoryRating(category_id=category_id, rating=value)
        for category_id, value in category_ratings.items()
    ]
    review.benefits = [ReviewBenefit(benefit_type_id=benefit_id) for benefit_id in sorted(set(benefit_type_ids))]
    db.add(review)
    db.flush()
    return review


def order_reviews(query, sort_by: str = "created_at", sort_order: str = "desc"):
    column = REVIEW_SORT_FIELDS.get(sort_by, Review.created_at)
    order = column.asc() if sort_order == "asc" else column.desc()
    return query.order_by(order, Review.id.desc() if sort_order != "asc" else Review.id.asc())


def list_company_reviews_query(
    db: Session,
    company_id: int,
    city_id: Optional[int] = None,
    min_rating: Optional[float] = None,
    max_rating: Optional[float] = None,
    is_former_employee: Optional[bool] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
):
    query = db.query(Review).filter(Review.company_id == company_id, Review.status == STATUS_APPROVED)
    if city_id is not None:
        query = query.filter(Review.city_id == city_id)
    if min_rating is not None:
        query = query.filter(Review.rating >= min_rating)
    if max_rating is not None:
        query = query.filter(Review.rating <= max_rating)
    if is_former_employee is not None:
        query = query.filter(Review.is_former_employee.is_(is_former_employee))
    return order_reviews(query, sort_by, sort_order)


def list_user_reviews_query(db: Session, user_id: int, status: Optional[str] = None):
    query = db.query(Review).filter(Review.user_id == user_id)
    if status:
        query = query.filter(Review.status == status)
    return query.order_by(Review.created_at.desc(), Review.id.desc())


def list_reviews_by_status_query(
    db: Session,
    status: str,
    company_id: Optional[int] = None,
    sort_order: str = "asc",
):
    query = db.query(Review).filter(Review.status == status)
    if company_id is not None:
        query = query.filter(Review.company_id == company_id)
    return order_reviews(query, "created_at", sort_order)


def delete_review(db: Session, review: Review) -> None:
    db.delete(review)
    db.flush()


# Useful marks
def is_marked_useful(db: Session, user_id: int, review_id: int) -> bool:
    return (
        db.query(UsefulMark.id)
        .filter(UsefulMark.user_id == user_id, UsefulMark.review_id == review_id)
        .first()
        is not None
    )


def get_marked_review_ids(db: Session, user_id: int, review_ids: List[int]) -> Set[int]:
    if not review_ids:
        return set()
    rows = (
        db.query(UsefulMark.review_id)
        .filter(UsefulMark.user_id == user_id, UsefulMark.review_id.in_(review_ids))
        .all()
    )
    return {review_id for (review_id,) in rows}


def add_useful_mark(db: Session, user_id: int, review_id: int) -> bool:
    """Mark a review as useful. Returns False when the mark already existed.

    The insert is skipped by the database on a (user_id, review_id) conflict, so
    concurrent requests from the same user never fail on the unique constraint.
    """
    insert = UPSERT_DIALECTS[db.get_bind().dialect.name]
    statement = (
        insert(UsefulMark)
        .values(user_id=user_id, review_id=review_id)
        .on_conflict_do_nothing(index_elements=["user_id", "review_id"])
    )
    result = db.execute(statement)
    return result.rowcount == 1


def remove_useful_mark(db: Session, user_id: int, review_id: int) -> bool:
    deleted = (
        db.query(UsefulMark)
        .filter(UsefulMark.user_id == user_id, UsefulMark.review_id == review_id)
        .delete(synchronize_session="fetch")
    )
    return deleted > 0


def refresh_useful_count(db: Session, review: Review) -> Review:
    db.flush()
    review.useful_count = db.query(func.count(UsefulMark.id)).filter(UsefulMark.review_id == review.id).scalar() or 0
    db.flush()
    return review


def get_marked_reviews(db: Session, user_id: int) -> List[Review]:
    return db.query(Review).join(UsefulMark, UsefulMark.review_id == Review.id).filter(UsefulMark.user_id == user_id).all()


def get_approved_company_ids(db: Session, user_id: int) -> Set[int]:
    rows = (
        db.query(Review.company_id)
        .filter(Review.user_id == user_id, Review.status == STATUS_APPROVED)
        .distinct()
        .all()
    )
    return {company_id for (company_id,) in rows}
