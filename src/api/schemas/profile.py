"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.entities.profile import parse_skills


class SocialLinksSchema(BaseModel):
    """Links to social accounts."""

    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` may be a comma-separated string or a list of strings.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    status: str = Field(..., min_length=1, max_length=100)
    skills: list[str]
    handle: str | None = Field(None, max_length=100)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    github_username: str | None = Field(None, max_length=39)
    social: SocialLinksSchema | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if isinstance(v, str) or (
            isinstance(v, list) and all(isinstance(s, str) for s in v)
        ):
            return parse_skills(v)
        return v

    @field_validator("skills")
    @classmethod
    def require_skills(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Skills is required")
        return v


class _DatedEntry(BaseModel):
    """Shared period fields for experience and education entries."""

    model_config = ConfigDict(str_strip_whitespace=True)

    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def check_period(self) -> "_DatedEntry":
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("to_date cannot be before from_date")
        if self.current:
            self.to_date = None
        return self


class ExperienceIn(_DatedEntry):
    """Schema for adding or replacing an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationIn(_DatedEntry):
    """Schema for adding or replacing an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    """Schema for Experience response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for Education response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class ProfileOwner(BaseModel):
    """Public fields of the profile's owner."""

    id: UUID
    name: str | None = None
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user: ProfileOwner
    status: str
    skills: list[str]
    handle: str | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = {}
    experience: list[ExperienceResponse] = []
    education: list[EducationResponse] = []
    created_at: datetime
    updated_at: datetime


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class GitHubReposResponse(BaseModel):
    """Repositories proxied from GitHub, as GitHub returned them."""

    data: list[dict[str, Any]]
