from typing import Annotated, List
from pydantic import BaseModel, StringConstraints
from jobsolution.schemas.common_schema import Pagination


class CityCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    region: Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)] = ""
    country: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


class CityResponse(BaseModel):
    id: int
    name: str
    region: str
    country: str

    class Config:
        from_attributes = True


class CityListResponse(BaseModel):
    cities: List[CityResponse]
    pagination: Pagination
