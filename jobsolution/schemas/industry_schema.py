import re
from typing import Annotated, Optional
from pydantic import BaseModel, StringConstraints, field_validator
from jobsolution.config.errors import ErrorMessages

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{3,6}$")


def validate_color(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not HEX_COLOR.match(v):
        raise ValueError(ErrorMessages.INVALID_COLOR)
    return v


class IndustryCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        return validate_color(v)


class IndustryColorUpdate(BaseModel):
    color: str

    @field_validator("color")
    @classmethod
    def check_color(cls, v):
        return validate_color(v)


class IndustryResponse(BaseModel):
    id: int
    name: str
    color: str

    class Config:
        from_attributes = True
