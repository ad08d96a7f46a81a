from datetime import datetime
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from jobsolution.config.errors import ErrorMessages
from jobsolution.models.company_model import COMPANY_SIZES
from jobsolution.schemas.city_schema import CityResponse
from jobsolution.schemas.common_schema import Pagination
from jobsolution.schemas.industry_schema import IndustryResponse


class CompanyCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=255)]
    size: str
    logo: Optional[str] = None
    website: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city_id: int = Field(..., ge=1)
    industries: List[int] = Field(..., min_length=1)

    @field_validator("size")
    @classmethod
    def check_size(cls, v):
        if v not in COMPANY_SIZES:
            raise ValueError(ErrorMessages.INVALID_COMPANY_SIZE)
        return v


class CompanyCategoryRatingResponse(BaseModel):
    category_id: int
    category: str
    rating: float


class CompanyResponse(BaseModel):
    id: int
    name: str
    slug: str
    size: str
    size_description: str
    logo: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city_id: Optional[int] = None
    city: Optional[CityResponse] = None
    industries: List[IndustryResponse] = []
    reviews_count: int
    average_rating: float
    recommendation_percentage: float
    category_ratings: List[CompanyCategoryRatingResponse] = []
    created_at: datetime
    updated_at: datetime


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
    company_sizes: Dict[str, str]
    pagination: Pagination
