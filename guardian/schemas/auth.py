from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from guardian.schemas.base import CamelModel


Role = Literal["user", "admin"]


def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SignupRequest(CamelModel):
    email: EmailStr
    # Length policy lives in settings, checked by the accounts service
    password: str
    display_name: Optional[str] = Field(default=None, max_length=100)

    normalize_email = field_validator("email", mode="before")(_normalize_email)

    @field_validator("display_name")
    @classmethod
    def blank_display_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    normalize_email = field_validator("email", mode="before")(_normalize_email)


class PublicUser(CamelModel):
    id: int
    email: str
    display_name: str


class LoginUser(PublicUser):
    role: Role


class SignupResponse(CamelModel):
    message: str
    user: PublicUser


class LoginResponse(CamelModel):
    message: str
    user: LoginUser


class SessionResponse(CamelModel):
    user: PublicUser


class MessageResponse(CamelModel):
    message: str


class UserOut(CamelModel):
    id: int
    email: str
    display_name: Optional[str]
    role: Role
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime


class UpdateUserRoleRequest(CamelModel):
    role: Role


class UpdateUserActiveRequest(CamelModel):
    is_active: bool
