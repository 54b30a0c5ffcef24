"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class SocialLinksSchema(BaseModel):
    """Social links (all optional)."""

    youtube: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's Profile.

    ``skills`` accepts a comma-separated string or a list of strings.
    """

    status: str = Field(..., min_length=1, max_length=100)
    skills: str | list[str]
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    github_username: str | None = Field(None, max_length=100)
    social: SocialLinksSchema | None = None

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: Any) -> Any:
        items = v.split(",") if isinstance(v, str) else v
        if not any(item.strip() for item in items):
            raise ValueError("Skills is required")
        return v


class _DatedEntry(BaseModel):
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self) -> "_DatedEntry":
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("to_date must not be before from_date")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for adding an Experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for adding an Education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    """Schema for an Experience entry."""

    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date
    to_date: date | None
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    """Schema for an Education entry."""

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None
    current: bool
    description: str | None


class ProfileOwner(BaseModel):
    """Owner display data joined onto a profile."""

    id: UUID
    name: str | None
    avatar: str | None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    id: UUID
    user: ProfileOwner
    status: str
    skills: list[str]
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    github_username: str | None
    social: SocialLinksSchema
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
