from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.schemas.lookup_schema import LookupResponse
from jobsolution.services.lookup_service import list_entries, get_entry

# (url prefix, model, tag); the admin router reuses this table for write routes
LOOKUP_RESOURCES = [
    ("/rating-categories", RatingCategory, "rating categories"),
    ("/benefit-types", BenefitType, "benefit types"),
    ("/employment-types", EmploymentType, "employment types"),
    ("/employment-periods", EmploymentPeriod, "employment periods"),
]


def build_lookup_router(prefix: str, model, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=List[LookupResponse], summary=f"List {tag}")
    def list_all(db: Session = Depends(get_db)):
        return list_entries(db, model)

    @router.get("/{entity_id}", response_model=LookupResponse, summary=f"Get one of the {tag}")
    def get_one(entity_id: int, db: Session = Depends(get_db)):
        return get_entry(db, model, entity_id)

    return router


routers = [build_lookup_router(prefix, model, tag) for prefix, model, tag in LOOKUP_RESOURCES]
