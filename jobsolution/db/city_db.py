from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from jobsolution.config.errors import EntityInUseError
from jobsolution.db.lookup_db import find_usages
from jobsolution.models.city_model import City
from jobsolution.models.company_model import Company
from jobsolution.models.review_model import Review

CITY_USAGES = [("companies", Company.city_id), ("reviews", Review.city_id)]

CITY_SORT_FIELDS = {"name": City.name, "region": City.region}


def get_city_by_id(db: Session, city_id: int) -> Optional[City]:
    return db.query(City).filter(City.id == city_id).first()


def find_city(db: Session, name: str, region: str, country: str) -> Optional[City]:
    return (
        db.query(City)
        .filter(City.name == name, City.region == region, City.country == country)
        .first()
    )


def list_cities_query(
    db: Session,
    search: Optional[str] = None,
    country: Optional[str] = None,
    sort_by: str = "name",
    sort_order: str = "asc",
):
    query = db.query(City)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(City.name.ilike(pattern), City.region.ilike(pattern)))
    if country:
        query = query.filter(City.country.ilike(country))

    column = CITY_SORT_FIELDS.get(sort_by, City.name)
    order = column.desc() if sort_order == "desc" else column.asc()
    return query.order_by(order, City.id)


def search_cities(db: Session, text: str, limit: int = 20):
    pattern = f"%{text}%"
    return (
        db.query(City)
        .filter(or_(City.name.ilike(pattern), City.region.ilike(pattern)))
        .order_by(City.name, City.id)
        .limit(limit)
        .all()
    )


def create_city(db: Session, name: str, region: str, country: str) -> City:
    city = City(name=name, region=region or name, country=country)
    db.add(city)
    db.flush()
    return city


def update_city(db: Session, city: City, name: str, region: str, country: str) -> City:
    city.name = name
    city.region = region or name
    city.country = country
    db.flush()
    return city


def delete_city(db: Session, city: City) -> None:
    used_by = find_usages(db, city.id, CITY_USAGES)
    if used_by:
        raise EntityInUseError("city", used_by)
    db.delete(city)
    db.flush()
