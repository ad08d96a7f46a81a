from datetime import datetime
from typing import Annotated, List
from pydantic import BaseModel, StringConstraints, field_validator
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.suggestion_model import SUGGESTION_TYPES
from jobsolution.schemas.common_schema import Pagination


class SuggestionCreate(BaseModel):
    type: str
    text: Annotated[str, StringConstraints(strip_whitespace=True, min_length=5, max_length=2000)]

    @field_validator("type")
    @classmethod
    def check_type(cls, v):
        if v not in SUGGESTION_TYPES:
            raise ValueError(ErrorMessages.INVALID_SUGGESTION_TYPE)
        return v


class SuggestionResponse(BaseModel):
    id: int
    type: str
    text: str
    created_at: datetime

    class Config:
        from_attributes = True


class SuggestionListResponse(BaseModel):
    suggestions: List[SuggestionResponse]
    pagination: Pagination
