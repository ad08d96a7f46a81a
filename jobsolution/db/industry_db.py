from typing import Optional, Sequence
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from jobsolution.config.errors import EntityInUseError
from jobsolution.db.lookup_db import find_usages
from jobsolution.models.industry_model import Industry, company_industries, DEFAULT_INDUSTRY_COLOR

INDUSTRY_USAGES = [("companies", company_industries.c.industry_id)]


def get_industry_by_id(db: Session, industry_id: int) -> Optional[Industry]:
    return db.query(Industry).filter(Industry.id == industry_id).first()


def get_industry_by_name(db: Session, name: str) -> Optional[Industry]:
    return db.query(Industry).filter(or_(Industry.name == name, func.lower(Industry.name) == name.lower())).first()


def get_industries_by_ids(db: Session, ids: Sequence[int]):
    if not ids:
        return []
    return db.query(Industry).filter(Industry.id.in_(set(ids))).order_by(Industry.name).all()


def list_industries(db: Session):
    return db.query(Industry).order_by(Industry.name).all()


def get_company_industries(db: Session, company_id: int):
    return (
        db.query(Industry)
        .join(company_industries, company_industries.c.industry_id == Industry.id)
        .filter(company_industries.c.company_id == company_id)
        .order_by(Industry.name)
        .all()
    )


def create_industry(db: Session, name: str, color: Optional[str] = None) -> Industry:
    industry = Industry(name=name, color=color or DEFAULT_INDUSTRY_COLOR)
    db.add(industry)
    db.flush()
    return industry


def update_industry(db: Session, industry: Industry, name: str, color: Optional[str] = None) -> Industry:
    industry.name = name
    if color:
        industry.color = color
    db.flush()
    return industry


def update_industry_color(db: Session, industry: Industry, color: str) -> Industry:
    industry.color = color
    db.flush()
    return industry


def delete_industry(db: Session, industry: Industry) -> None:
    used_by = find_usages(db, industry.id, INDUSTRY_USAGES)
    if used_by:
        raise EntityInUseError("industry", used_by)
    db.delete(industry)
    db.flush()
