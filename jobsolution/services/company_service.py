import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction, unique_transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.company_model import Company, COMPANY_SIZES
from jobsolution.schemas.company_schema import (
    CompanyCreate,
    CompanyResponse,
    CompanyListResponse,
    CompanyCategoryRatingResponse,
)
from jobsolution.schemas.city_schema import CityResponse
from jobsolution.schemas.industry_schema import IndustryResponse
from jobsolution.db import company_db
from jobsolution.db.city_db import get_city_by_id
from jobsolution.db.industry_db import get_industries_by_ids
from jobsolution.utils.pagination_util import paginate, pagination_meta

logger = logging.getLogger(__name__)


def to_company_response(company: Company) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        slug=company.slug,
        size=company.size,
        size_description=COMPANY_SIZES.get(company.size, ""),
        logo=company.logo,
        website=company.website,
        email=company.email,
        phone=company.phone,
        address=company.address,
        city_id=company.city_id,
        city=CityResponse.model_validate(company.city) if company.city else None,
        industries=[IndustryResponse.model_validate(i) for i in company.industries],
        reviews_count=company.reviews_count,
        average_rating=company.average_rating,
        recommendation_percentage=company.recommendation_percentage,
        category_ratings=[
            CompanyCategoryRatingResponse(category_id=r.category_id, category=r.category.name, rating=r.rating)
            for r in sorted(company.category_ratings, key=lambda r: r.category_id)
        ],
        created_at=company.created_at,
        updated_at=company.updated_at,
    )


def parse_industry_ids(raw: Optional[str]) -> List[int]:
    """Parse the comma separated ``industries`` query parameter."""
    if not raw:
        return []
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_INDUSTRIES)
        ids.append(int(part))
    return ids


def list_companies(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    industries: Optional[str] = None,
    size: Optional[str] = None,
    min_rating: Optional[float] = None,
    city_id: Optional[int] = None,
    city: Optional[str] = None,
    sort_by: str = "rating",
    sort_order: str = "desc",
) -> CompanyListResponse:
    if size and size not in COMPANY_SIZES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_COMPANY_SIZE)

    query = company_db.list_companies_query(
        db,
        search=search,
        industries=parse_industry_ids(industries),
        size=size,
        min_rating=min_rating,
        city_id=city_id,
        city=city,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    companies, total = paginate(query, page, limit)
    return CompanyListResponse(
        companies=[to_company_response(c) for c in companies],
        company_sizes=COMPANY_SIZES,
        pagination=pagination_meta(total, page, limit),
    )


def find_company(db: Session, id_or_slug: str) -> Company:
    company = None
    if id_or_slug.isdigit():
        company = company_db.get_company_by_id(db, int(id_or_slug))
    if company is None:
        company = company_db.get_company_by_slug(db, id_or_slug)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)
    return company


def get_company(db: Session, id_or_slug: str) -> CompanyResponse:
    return to_company_response(find_company(db, id_or_slug))


def validate_company_input(db: Session, data: CompanyCreate):
    industries = get_industries_by_ids(db, data.industries)
    if len(industries) != len(set(data.industries)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_INDUSTRIES)
    if get_city_by_id(db, data.city_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_CITY)
    return industries


def company_fields(data: CompanyCreate) -> dict:
    return data.model_dump(exclude={"industries"})


def create_company(db: Session, data: CompanyCreate) -> CompanyResponse:
    if company_db.get_company_by_name(db, data.name):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.COMPANY_ALREADY_EXISTS)
    industries = validate_company_input(db, data)

    with unique_transaction(db, ErrorMessages.COMPANY_ALREADY_EXISTS):
        company = company_db.create_company(db, company_fields(data), industries)

    logger.info(f"Created company {company.id} ({company.slug})")
    return to_company_response(company)


def update_company(db: Session, company_id: int, data: CompanyCreate) -> CompanyResponse:
    company = company_db.get_company_by_id(db, company_id)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)

    existing = company_db.get_company_by_name(db, data.name)
    if existing is not None and existing.id != company.id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.COMPANY_ALREADY_EXISTS)
    industries = validate_company_input(db, data)

    with unique_transaction(db, ErrorMessages.COMPANY_ALREADY_EXISTS):
        company_db.update_company(db, company, company_fields(data), industries)

    logger.info(f"Updated company {company.id}")
    return to_company_response(company)


def delete_company(db: Session, company_id: int) -> dict:
    company = company_db.get_company_by_id(db, company_id)
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)

    with transaction(db):
        company_db.delete_company(db, company)

    logger.info(f"Deleted company {company_id}")
    return {"message": "Company deleted"}
