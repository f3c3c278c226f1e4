"""Pydantic schemas for the auth module API."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from consulta_prod.core.schemas import ApiModel


class UserRole(str, Enum):
    """Enumeration of account roles."""

    ADMIN = "admin"
    OPERATOR = "operator"


class LoginRequest(ApiModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserPublic(ApiModel):
    """Profile returned by login and ``/auth/me``."""

    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole


class LoginResponse(ApiModel):
    token: str
    user: UserPublic


class UserBase(ApiModel):
    """Base schema for account objects with common fields."""

    username: str = Field(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    role: UserRole = UserRole.OPERATOR
    active: bool = True

    @field_validator("username")
    @classmethod
    def username_format(cls, v: str) -> str:
        if not v.replace("_", "").replace(".", "").replace("-", "").isalnum():
            raise ValueError("Username must be alphanumeric (underscores, dots and dashes allowed)")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Optional[Any]:
        if v == "":
            return None
        return v


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class UserUpdate(ApiModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    active: Optional[bool] = None
    password: Optional[str] = Field(default=None, min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Optional[Any]:
        if v == "":
            return None
        return v


class UserRead(UserPublic):
    """Full account view for administrators. Never carries the password."""

    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
