import logging
from typing import Type
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction, unique_transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.lookup_model import LookupMixin, RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.schemas.lookup_schema import LookupCreate, LookupResponse
from jobsolution.db import lookup_db

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGES = {
    RatingCategory: ErrorMessages.RATING_CATEGORY_NOT_FOUND,
    BenefitType: ErrorMessages.BENEFIT_TYPE_NOT_FOUND,
    EmploymentType: ErrorMessages.EMPLOYMENT_TYPE_NOT_FOUND,
    EmploymentPeriod: ErrorMessages.EMPLOYMENT_PERIOD_NOT_FOUND,
}


def list_entries(db: Session, model: Type[LookupMixin]):
    return [LookupResponse.model_validate(e) for e in lookup_db.list_all(db, model)]


def get_entry_or_404(db: Session, model: Type[LookupMixin], entity_id: int):
    entity = lookup_db.get_by_id(db, model, entity_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGES[model])
    return entity


def get_entry(db: Session, model: Type[LookupMixin], entity_id: int) -> LookupResponse:
    return LookupResponse.model_validate(get_entry_or_404(db, model, entity_id))


def create_entry(db: Session, model: Type[LookupMixin], data: LookupCreate) -> LookupResponse:
    if lookup_db.get_by_name(db, model, data.name):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.NAME_ALREADY_EXISTS)
    with unique_transaction(db, ErrorMessages.NAME_ALREADY_EXISTS):
        entity = lookup_db.create(db, model, data.name, data.description)
    logger.info(f"Created {model.__tablename__} entry {entity.id}")
    return LookupResponse.model_validate(entity)


def update_entry(db: Session, model: Type[LookupMixin], entity_id: int, data: LookupCreate) -> LookupResponse:
    entity = get_entry_or_404(db, model, entity_id)
    existing = lookup_db.get_by_name(db, model, data.name)
    if existing is not None and existing.id != entity.id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ErrorMessages.NAME_ALREADY_EXISTS)
    with unique_transaction(db, ErrorMessages.NAME_ALREADY_EXISTS):
        lookup_db.update(db, entity, data.name, data.description)
    return LookupResponse.model_validate(entity)


def delete_entry(db: Session, model: Type[LookupMixin], entity_id: int) -> dict:
    entity = get_entry_or_404(db, model, entity_id)
    with transaction(db):
        lookup_db.delete(db, entity)
    logger.info(f"Deleted {model.__tablename__} entry {entity_id}")
    return {"message": "Deleted"}
