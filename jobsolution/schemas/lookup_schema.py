from typing import Annotated, Optional
from pydantic import BaseModel, StringConstraints

LookupName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


class LookupCreate(BaseModel):
    name: LookupName
    description: Optional[Annotated[str, StringConstraints(max_length=255)]] = None


class LookupResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
