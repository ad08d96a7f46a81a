from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.models.user_model import User, ROLE_ADMIN
from jobsolution.schemas.industry_schema import IndustryResponse, IndustryColorUpdate
from jobsolution.services.auth_service import require_roles
from jobsolution.services.industry_service import list_industries, get_company_industries, update_industry_color

router = APIRouter(prefix="/industries", tags=["industries"])


@router.get("", response_model=List[IndustryResponse], summary="List industries")
def industries(db: Session = Depends(get_db)):
    return list_industries(db)


@router.get("/company/{company_id}", response_model=List[IndustryResponse], summary="Industries of a company")
def company_industries(company_id: int, db: Session = Depends(get_db)):
    return get_company_industries(db, company_id)


@router.put(
    "/{industry_id}/color",
    response_model=IndustryResponse,
    summary="Change industry color",
    description="Admin only. The color is a hex value starting with `#`."
)
def change_color(
    industry_id: int,
    data: IndustryColorUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ROLE_ADMIN)),
):
    return update_industry_color(db, industry_id, data.color)
