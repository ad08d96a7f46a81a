from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jobsolution.config.database import transaction
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.suggestion_model import SUGGESTION_TYPES
from jobsolution.schemas.suggestion_schema import SuggestionCreate, SuggestionResponse, SuggestionListResponse
from jobsolution.db import suggestion_db
from jobsolution.utils.pagination_util import paginate, pagination_meta


def create_suggestion(db: Session, data: SuggestionCreate) -> SuggestionResponse:
    with transaction(db):
        suggestion = suggestion_db.create_suggestion(db, data.type, data.text)
    return SuggestionResponse.model_validate(suggestion)


def list_suggestions(
    db: Session,
    page: int,
    limit: int,
    type: Optional[str] = None,
    sort_order: str = "desc",
) -> SuggestionListResponse:
    if type and type not in SUGGESTION_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ErrorMessages.INVALID_SUGGESTION_TYPE)
    query = suggestion_db.list_suggestions_query(db, type, sort_order)
    suggestions, total = paginate(query, page, limit)
    return SuggestionListResponse(
        suggestions=[SuggestionResponse.model_validate(s) for s in suggestions],
        pagination=pagination_meta(total, page, limit),
    )


def get_suggestion(db: Session, suggestion_id: int) -> SuggestionResponse:
    suggestion = suggestion_db.get_suggestion_by_id(db, suggestion_id)
    if suggestion is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.SUGGESTION_NOT_FOUND)
    return SuggestionResponse.model_validate(suggestion)


def delete_suggestion(db: Session, suggestion_id: int) -> dict:
    suggestion = suggestion_db.get_suggestion_by_id(db, suggestion_id)
    if suggestion is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorMessages.SUGGESTION_NOT_FOUND)
    with transaction(db):
        suggestion_db.delete_suggestion(db, suggestion)
    return {"message": "Suggestion deleted"}
