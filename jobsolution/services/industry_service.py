import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction, unique_transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.industry_model import Industry
from jobsolution.schemas.industry_schema import IndustryCreate, IndustryResponse
from jobsolution.db import industry_db
from jobsolution.db.company_db import get_company_by_id

logger = logging.getLogger(__name__)


def list_industries(db: Session):
    return [IndustryResponse.model_validate(i) for i in industry_db.list_industries(db)]


def get_company_industries(db: Session, company_id: int):
    if get_company_by_id(db, company_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.COMPANY_NOT_FOUND)
    return [IndustryResponse.model_validate(i) for i in industry_db.get_company_industries(db, company_id)]


def get_industry_or_404(db: Session, industry_id: int) -> Industry:
    industry = industry_db.get_industry_by_id(db, industry_id)
    if industry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.INDUSTRY_NOT_FOUND)
    return industry


def ensure_unique(db: Session, name: str, industry_id: Optional[int] = None):
    existing = industry_db.get_industry_by_name(db, name)
    if existing is not None and existing.id != industry_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.INDUSTRY_ALREADY_EXISTS)


def create_industry(db: Session, data: IndustryCreate) -> IndustryResponse:
    ensure_unique(db, data.name)
    with unique_transaction(db, ErrorMessages.INDUSTRY_ALREADY_EXISTS):
        industry = industry_db.create_industry(db, data.name, data.color)
    logger.info(f"Created industry {industry.id}")
    return IndustryResponse.model_validate(industry)


def update_industry(db: Session, industry_id: int, data: IndustryCreate) -> IndustryResponse:
    industry = get_industry_or_404(db, industry_id)
    ensure_unique(db, data.name, industry.id)
    with unique_transaction(db, ErrorMessages.INDUSTRY_ALREADY_EXISTS):
        industry_db.update_industry(db, industry, data.name, data.color)
    return IndustryResponse.model_validate(industry)


def update_industry_color(db: Session, industry_id: int, color: str) -> IndustryResponse:
    industry = get_industry_or_404(db, industry_id)
    with transaction(db):
        industry_db.update_industry_color(db, industry, color)
    return IndustryResponse.model_validate(industry)


def delete_industry(db: Session, industry_id: int) -> dict:
    industry = get_industry_or_404(db, industry_id)
    with transaction(db):
        industry_db.delete_industry(db, industry)
    logger.info(f"Deleted industry {industry_id}")
    return {"message": "Industry deleted"}
