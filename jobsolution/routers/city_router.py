from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.schemas.city_schema import CityResponse, CityListResponse
from jobsolution.services.city_service import list_cities, search_cities

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=CityListResponse, summary="List cities")
def cities(
    search: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    sort_by: str = Query("name", pattern="^(name|region)$"),
    sort_order: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return list_cities(db, page, limit, search=search, country=country, sort_by=sort_by, sort_order=sort_order)


@router.get(
    "/search",
    response_model=List[CityResponse],
    summary="Search cities",
    description="Autocomplete lookup by city or region name."
)
def city_search(
    query: str = Query(..., min_length=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return search_cities(db, query, limit)
