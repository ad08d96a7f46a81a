import logging
from typing import List, Optional
from sqlalchemy import func, case, or_
from sqlalchemy.orm import Session
from jobsolution.models.city_model import City
from jobsolution.models.company_model import Company, CompanyCategoryRating
from jobsolution.models.industry_model import Industry
from jobsolution.models.review_model import Review, ReviewCategoryRating, STATUS_APPROVED
from jobsolution.utils.slug_util import company_slug

logger = logging.getLogger(__name__)

COMPANY_SORT_FIELDS = {
    "name": Company.name,
    "rating": Company.average_rating,
    "reviews_count": Company.reviews_count,
    "created_at": Company.created_at,
}


def get_company_by_id(db: Session, company_id: int) -> Optional[Company]:
    return db.query(Company).filter(Company.id == company_id).first()


def get_company_by_slug(db: Session, slug: str) -> Optional[Company]:
    return db.query(Company).filter(Company.slug == slug).first()


def get_company_by_name(db: Session, name: str) -> Optional[Company]:
    return db.query(Company).filter(or_(Company.name == name, func.lower(Company.name) == name.lower())).first()


def list_companies_query(
    db: Session,
    search: Optional[str] = None,
    industries: Optional[List[int]] = None,
    size: Optional[str] = None,
    min_rating: Optional[float] = None,
    city_id: Optional[int] = None,
    city: Optional[str] = None,
    sort_by: str = "rating",
    sort_order: str = "desc",
):
    query = db.query(Company)
    if search:
        query = query.filter(Company.name.ilike(f"%{search}%"))
    if industries:
        query = query.filter(Company.industries.any(Industry.id.in_(industries)))
    if size:
        query = query.filter(Company.size == size)
    if min_rating is not None:
        query = query.filter(Company.average_rating >= min_rating)
    if city_id is not None:
        query = query.filter(Company.city_id == city_id)
    if city:
        query = query.filter(Company.city.has(City.name.ilike(f"%{city}%")))

    column = COMPANY_SORT_FIELDS.get(sort_by, Company.average_rating)
    order = column.asc() if sort_order == "asc" else column.desc()
    return query.order_by(order, Company.id)


def create_company(db: Session, data: dict, industries: List[Industry]) -> Company:
    # slug needs the generated id, so it is filled in after the first flush
    company = Company(slug=f"pending-{data['name']}", **data)
    company.industries = list(industries)
    db.add(company)
    db.flush()
    company.slug = company_slug(company.name, company.id)
    db.flush()
    return company


def update_company(db: Session, company: Company, data: dict, industries: List[Industry]) -> Company:
    name_changed = data["name"] != company.name
    for key, value in data.items():
        setattr(company, key, value)
    if name_changed:
        company.slug = company_slug(company.name, company.id)
    company.industries = list(industries)
    db.flush()
    return company


def delete_company(db: Session, company: Company) -> None:
    db.delete(company)
    db.flush()


def update_rating(db: Session, company_id: int) -> Optional[Company]:
    """Recompute a company's aggregates from its approved reviews.

    Rebuilds average rating, review count, recommendation percentage and the
    per-category averages. Callers own the surrounding transaction.
    """
    # sessions run with autoflush off; pending review changes must be visible to the aggregates
    db.flush()
    company = get_company_by_id(db, company_id)
    if company is None:
        return None

    approved = (Review.company_id == company_id, Review.status == STATUS_APPROVED)
    count, average, recommended = (
        db.query(
            func.count(Review.id),
            func.avg(Review.rating),
            func.sum(case((Review.is_recommended.is_(True), 1), else_=0)),
        )
        .filter(*approved)
        .one()
    )

    company.reviews_count = count or 0
    company.average_rating = round(float(average), 2) if average is not None else 0.0
    company.recommendation_percentage = round(float(recommended or 0) * 100.0 / count, 2) if count else 0.0

    category_averages = (
        db.query(ReviewCategoryRating.category_id, func.avg(ReviewCategoryRating.rating))
        .join(Review, Review.id == ReviewCategoryRating.review_id)
        .filter(*approved)
        .group_by(ReviewCategoryRating.category_id)
        .all()
    )

    company.category_ratings.clear()
    db.flush()
    for category_id, category_average in category_averages:
        company.category_ratings.append(
            CompanyCategoryRating(category_id=category_id, rating=round(float(category_average), 2))
        )
    db.flush()

    logger.info(
        f"Recomputed ratings for company {company_id}: "
        f"{company.reviews_count} approved reviews, average {company.average_rating}"
    )
    return company
