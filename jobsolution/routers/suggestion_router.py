from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.models.user_model import User, ROLE_ADMIN
from jobsolution.schemas.common_schema import MessageResponse
from jobsolution.schemas.suggestion_schema import SuggestionCreate, SuggestionResponse, SuggestionListResponse
from jobsolution.services.auth_service import require_roles
from jobsolution.services.suggestion_service import (
    create_suggestion,
    list_suggestions,
    get_suggestion,
    delete_suggestion,
)

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.post(
    "",
    response_model=SuggestionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a suggestion",
    description="""
    Public feedback form. `type` is `company` to propose a new company,
    or `suggestion` for general feedback.
    """
)
def submit_suggestion(data: SuggestionCreate, db: Session = Depends(get_db)):
    return create_suggestion(db, data)


@router.get("", response_model=SuggestionListResponse, summary="List suggestions")
def suggestions(
    type: Optional[str] = Query(None),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ROLE_ADMIN)),
):
    return list_suggestions(db, page, limit, type=type, sort_order=sort_order)


@router.get("/{suggestion_id}", response_model=SuggestionResponse, summary="Get a suggestion")
def suggestion_detail(
    suggestion_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ROLE_ADMIN)),
):
    return get_suggestion(db, suggestion_id)


@router.delete("/{suggestion_id}", response_model=MessageResponse, summary="Delete a suggestion")
def remove_suggestion(
    suggestion_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ROLE_ADMIN)),
):
    return delete_suggestion(db, suggestion_id)
