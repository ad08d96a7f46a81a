from typing import Dict, List, Optional, Sequence, Tuple, Type
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from jobsolution.config.errors import EntityInUseError
from jobsolution.models.company_model import CompanyCategoryRating
from jobsolution.models.lookup_model import LookupMixin, RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.models.review_model import Review, ReviewCategoryRating, ReviewBenefit

# (label, referencing column) pairs checked before a lookup row is deleted
LOOKUP_USAGES: Dict[type, List[Tuple[str, object]]] = {
    RatingCategory: [
        ("review ratings", ReviewCategoryRating.category_id),
        ("company ratings", CompanyCategoryRating.category_id),
    ],
    BenefitType: [("reviews", ReviewBenefit.benefit_type_id)],
    EmploymentType: [("reviews", Review.employment_type_id)],
    EmploymentPeriod: [("reviews", Review.employment_period_id)],
}

LOOKUP_LABELS = {
    RatingCategory: "rating category",
    BenefitType: "benefit type",
    EmploymentType: "employment type",
    EmploymentPeriod: "employment period",
}


def find_usages(db: Session, entity_id: int, usages: Sequence[Tuple[str, object]]) -> List[str]:
    """Return the labels of every usage that still references ``entity_id``."""
    used_by = []
    for label, column in usages:
        count = db.query(func.count()).filter(column == entity_id).scalar()
        if count:
            used_by.append(f"{label} ({count})")
    return used_by


def get_by_id(db: Session, model: Type[LookupMixin], entity_id: int):
    return db.query(model).filter(model.id == entity_id).first()


def get_by_name(db: Session, model: Type[LookupMixin], name: str):
    return db.query(model).filter(or_(model.name == name, func.lower(model.name) == name.lower())).first()


def get_by_ids(db: Session, model: Type[LookupMixin], ids: Sequence[int]):
    if not ids:
        return []
    return db.query(model).filter(model.id.in_(set(ids))).all()


def list_all(db: Session, model: Type[LookupMixin]):
    return db.query(model).order_by(model.id).all()


def create(db: Session, model: Type[LookupMixin], name: str, description: Optional[str] = None):
    entity = model(name=name, description=description)
    db.add(entity)
    db.flush()
    return entity


def update(db: Session, entity, name: str, description: Optional[str] = None):
    entity.name = name
    entity.description = description
    db.flush()
    return entity


def delete(db: Session, entity) -> None:
    model = type(entity)
    used_by = find_usages(db, entity.id, LOOKUP_USAGES[model])
    if used_by:
        raise EntityInUseError(LOOKUP_LABELS[model], used_by)
    db.delete(entity)
    db.flush()
