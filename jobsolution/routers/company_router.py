from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.schemas.company_schema import CompanyResponse, CompanyListResponse
from jobsolution.services.company_service import list_companies, get_company

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get(
    "",
    response_model=CompanyListResponse,
    summary="List companies",
    description="""
    Lists companies with optional filters.
    `industries` takes comma separated industry ids, e.g. `industries=1,2,3`.
    """
)
def companies(
    search: Optional[str] = Query(None),
    industries: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    city_id: Optional[int] = Query(None, ge=1),
    city: Optional[str] = Query(None),
    sort_by: str = Query("rating", pattern="^(name|rating|reviews_count|created_at)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return list_companies(
        db,
        page,
        limit,
        search=search,
        industries=industries,
        size=size,
        min_rating=min_rating,
        city_id=city_id,
        city=city,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get(
    "/{id_or_slug}",
    response_model=CompanyResponse,
    summary="Company details",
    description="Looks a company up by numeric id or by slug."
)
def company_detail(id_or_slug: str, db: Session = Depends(get_db)):
    return get_company(db, id_or_slug)
