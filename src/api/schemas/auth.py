"""Pydantic schemas for Auth API."""

from pydantic import BaseModel, Field

from api.schemas.user import SubmittedEmail


class LoginRequest(BaseModel):
    """Schema for logging in with email and password."""

    email: SubmittedEmail
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for an issued token."""

    token: str
