from datetime import datetime
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, EmailStr, StringConstraints, field_validator
from jobsolution.config.errors import ErrorMessages
from jobsolution.schemas.common_schema import Pagination

Password = Annotated[str, StringConstraints(min_length=8, max_length=72)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


def validate_phone(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if not (v.isdigit() and len(v) == 11):
        raise ValueError(ErrorMessages.PHONE_FORMAT)
    return v


# Registration
class UserCreate(BaseModel):
    email: EmailStr
    password: Password
    password_confirm: str
    phone: Optional[str] = None
    first_name: Optional[Name] = None
    last_name: Optional[Name] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


class UserResponse(BaseModel):
    id: int
    email: EmailStr
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


# Login
class UserLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    user: UserResponse
    tokens: Token


class RefreshRequest(BaseModel):
    refresh_token: str


# Password reset
class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_token: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    token: str
    password: Password
    password_confirm: str


# Profile
class UserUpdate(BaseModel):
    phone: Optional[str] = None
    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    password: Optional[Password] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


# Administration
class RoleUpdate(BaseModel):
    role: Literal["user", "moderator", "admin"]


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: Pagination
