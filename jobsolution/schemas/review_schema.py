from datetime import datetime
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, Field, StringConstraints, field_validator
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.review_model import REVIEW_STATUSES
from jobsolution.schemas.city_schema import CityResponse
from jobsolution.schemas.common_schema import Pagination
from jobsolution.schemas.lookup_schema import LookupResponse

Position = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
ReviewText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


class ReviewCreate(BaseModel):
    company_id: int = Field(..., ge=1)
    position: Position
    employment_type_id: int = Field(..., ge=1)
    employment_period_id: int = Field(..., ge=1)
    city_id: int = Field(..., ge=1)
    category_ratings: Dict[int, float] = Field(..., min_length=1)
    pros: ReviewText
    cons: ReviewText
    benefit_type_ids: List[int] = []
    is_former_employee: bool = False
    is_recommended: bool = False

    @field_validator("category_ratings")
    @classmethod
    def check_ratings(cls, v):
        if any(rating < 1 or rating > 5 for rating in v.values()):
            raise ValueError(ErrorMessages.INVALID_RATING)
        return v


class ReviewUpdate(BaseModel):
    position: Optional[Position] = None
    rating: Optional[float] = Field(None, ge=1, le=5)
    pros: Optional[ReviewText] = None
    cons: Optional[ReviewText] = None
    is_former_employee: Optional[bool] = None
    is_recommended: Optional[bool] = None
    status: Optional[str] = None
    moderation_comment: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        if v is not None and v not in REVIEW_STATUSES:
            raise ValueError(ErrorMessages.INVALID_REVIEW_STATUS)
        return v


class ModerationRequest(BaseModel):
    moderation_comment: Optional[str] = None


class ReviewCategoryRatingResponse(BaseModel):
    category_id: int
    category: str
    rating: float


class ReviewBenefitResponse(BaseModel):
    benefit_type_id: int
    benefit: str


class ReviewCompany(BaseModel):
    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    company_id: int
    position: str
    employment_type_id: Optional[int] = None
    employment_period_id: Optional[int] = None
    city_id: Optional[int] = None
    rating: float
    pros: str
    cons: str
    is_former_employee: bool
    is_recommended: bool
    status: str
    moderation_comment: Optional[str] = None
    useful_count: int
    created_at: datetime
    updated_at: datetime
    approved_at: Optional[datetime] = None
    category_ratings: List[ReviewCategoryRatingResponse] = []
    benefits: List[ReviewBenefitResponse] = []
    company: Optional[ReviewCompany] = None
    city: Optional[CityResponse] = None
    employment_type: Optional[LookupResponse] = None
    employment_period: Optional[LookupResponse] = None
    is_marked_as_useful: bool = False


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    pagination: Pagination


class UsefulMarkResponse(BaseModel):
    review_id: int
    useful_count: int
    is_marked_as_useful: bool
