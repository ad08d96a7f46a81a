import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction, unique_transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.city_model import City
from jobsolution.schemas.city_schema import CityCreate, CityResponse, CityListResponse
from jobsolution.db import city_db
from jobsolution.utils.pagination_util import paginate, pagination_meta

logger = logging.getLogger(__name__)


def list_cities(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    country: Optional[str] = None,
    sort_by: str = "name",
    sort_order: str = "asc",
) -> CityListResponse:
    query = city_db.list_cities_query(db, search, country, sort_by, sort_order)
    cities, total = paginate(query, page, limit)
    return CityListResponse(
        cities=[CityResponse.model_validate(c) for c in cities],
        pagination=pagination_meta(total, page, limit),
    )


def search_cities(db: Session, text: str, limit: int):
    return [CityResponse.model_validate(c) for c in city_db.search_cities(db, text, limit)]


def get_city_or_404(db: Session, city_id: int) -> City:
    city = city_db.get_city_by_id(db, city_id)
    if city is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.CITY_NOT_FOUND)
    return city


def ensure_unique(db: Session, data: CityCreate, city_id: Optional[int] = None):
    existing = city_db.find_city(db, data.name, data.region or data.name, data.country)
    if existing is not None and existing.id != city_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.CITY_ALREADY_EXISTS)


def create_city(db: Session, data: CityCreate) -> CityResponse:
    ensure_unique(db, data)
    with unique_transaction(db, ErrorMessages.CITY_ALREADY_EXISTS):
        city = city_db.create_city(db, data.name, data.region, data.country)
    logger.info(f"Created city {city.id}")
    return CityResponse.model_validate(city)


def update_city(db: Session, city_id: int, data: CityCreate) -> CityResponse:
    city = get_city_or_404(db, city_id)
    ensure_unique(db, data, city.id)
    with unique_transaction(db, ErrorMessages.CITY_ALREADY_EXISTS):
        city_db.update_city(db, city, data.name, data.region, data.country)
    return CityResponse.model_validate(city)


def delete_city(db: Session, city_id: int) -> dict:
    city = get_city_or_404(db, city_id)
    with transaction(db):
        city_db.delete_city(db, city)
    logger.info(f"Deleted city {city_id}")
    return {"message": "City deleted"}
