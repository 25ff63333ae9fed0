"""Pydantic schemas for User API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from domain.entities.user import MIN_PASSWORD_LENGTH


def _check_email(value: str) -> str:
    """Validate the address but keep it exactly as submitted.

    email-validator normalizes the domain to lowercase; the stored address
    and the uniqueness check both use the raw input instead.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError("Please include a valid email") from exc
    return value


SubmittedEmail = Annotated[str, AfterValidator(_check_email)]


class UserRegister(BaseModel):
    """Schema for registering a user. The password is taken verbatim."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    email: SubmittedEmail
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class UserResponse(BaseModel):
    """Schema for User response. The password hash is never part of it."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ann",
                "email": "a@x.com",
                "avatar": "https://www.gravatar.com/avatar/0c8b...?s=200&r=g&d=mp",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str
    created_at: datetime


class UserDetailResponse(BaseModel):
    """Schema for single User."""

    data: UserResponse
