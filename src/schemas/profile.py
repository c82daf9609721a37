"""Profile Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.models.profile import AgeCategory, AgeDisclosure, NameDisplayType


class WorkHistoryItem(BaseModel):
    """One position in a user's work history."""

    company: str = Field(max_length=255, description="Employer")
    position: str = Field(max_length=255, description="Job title held")
    start_date: str | None = Field(default=None, description="Start date as entered")
    end_date: str | None = Field(default=None, description="End date as entered")
    description: str | None = Field(default=None, description="What the role involved")
    current: bool = Field(default=False, description="Whether this is the current position")


class ProfileContent(BaseModel):
    """Profile information fields, grouped by category."""

    full_name: str | None = Field(default=None, max_length=255, description="Canonical full name")
    username: str | None = Field(default=None, max_length=100, description="Username, used when no full name is set")

    # General
    education: str | None = Field(default=None, description="Education, e.g. 'Major University'")
    skills: str | None = Field(default=None, description="Skills")
    languages: str | None = Field(default=None, description="Spoken languages")
    general_location: str | None = Field(default=None, description="Broad location, e.g. 'West Coast, USA'")
    certifications: str | None = Field(default=None, description="Certifications")
    achievements: str | None = Field(default=None, description="Achievements")

    # Personal
    personal_interests: str | None = Field(default=None, description="Hobbies and interests")
    personal_bio: str | None = Field(default=None, description="Personal bio")
    personal_website: str | None = Field(default=None, description="Personal website")
    marital_status: str | None = Field(default=None, description="Relationship status")
    personal_pictures: list[str] | None = Field(default=None, max_length=3, description="Up to 3 personal pictures")
    primary_personal_pic: int | None = Field(default=None, ge=0, le=2, description="Index of primary personal picture")
    age: int | None = Field(default=None, ge=0, le=150, description="Age")
    age_disclosure: AgeDisclosure | None = Field(default=None, description="How much age information to share")
    age_category: AgeCategory | None = Field(default=None, description="Adult or minor")
    gender: str | None = Field(default=None, description="Gender identity")

    # Professional
    job_title: str | None = Field(default=None, description="Job title")
    company: str | None = Field(default=None, description="Company, e.g. 'Large Tech Company'")
    professional_bio: str | None = Field(default=None, description="Professional bio")
    work_experience: str | None = Field(default=None, description="Summary of work experience")
    professional_website: str | None = Field(default=None, description="Professional website")
    linkedin_profile: str | None = Field(default=None, description="LinkedIn profile URL")
    professional_pictures: list[str] | None = Field(
        default=None, max_length=3, description="Up to 3 professional pictures"
    )
    primary_professional_pic: int | None = Field(
        default=None, ge=0, le=2, description="Index of primary professional picture"
    )
    work_history: list[WorkHistoryItem] | None = Field(default=None, max_length=3, description="Up to 3 positions")


class ProfileSettings(BaseModel):
    """Visibility toggles and name display defaults."""

    show_demographics: bool | None = None
    show_education: bool | None = None
    show_skills: bool | None = None
    show_languages: bool | None = None
    show_certifications: bool | None = None
    show_achievements: bool | None = None
    show_location: bool | None = None
    show_personal_interests: bool | None = None
    show_personal_bio: bool | None = None
    show_personal_website: bool | None = None
    show_relationship_status: bool | None = None
    show_personal_pictures: bool | None = None
    show_job_info: bool | None = None
    show_professional_bio: bool | None = None
    show_work_experience: bool | None = None
    show_professional_websites: bool | None = None
    show_work_history: bool | None = None
    show_professional_pictures: bool | None = None

    default_name_display: NameDisplayType | None = Field(default=None, description="Name display for all contacts")
    default_pseudonym: str | None = Field(default=None, max_length=100, description="Pseudonym for all contacts")


class ProfileCreate(ProfileContent, ProfileSettings):
    """Schema for creating a profile.

    Omitted toggles take the database default (shown).
    """


class ProfileUpdate(ProfileContent, ProfileSettings):
    """Schema for updating a profile.

    All fields are optional for partial updates. Per-contact overrides are
    managed through the contact privacy endpoints instead.
    """


class ProfileResponse(ProfileContent, ProfileSettings):
    """Owner's full view of their profile."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID = Field(description="Profile owner")
    contact_privacy_settings: dict[str, Any] = Field(
        default_factory=dict, description="Per-contact overrides keyed by contact id"
    )
    created_at: datetime | None = Field(default=None, description="Profile creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")


class VisibleProfileResponse(ProfileContent):
    """Profile as seen by another user.

    Only the fields the viewer may see are set; unset fields are left out
    of the response body.
    """

    user_id: UUID = Field(description="Profile owner")
    display_name: str = Field(description="Name as shown to this viewer")


class NameDisplayPreviewRequest(BaseModel):
    """Request to preview a name display setting."""

    full_name: str = Field(default="", max_length=255, description="Name to transform")
    display_type: NameDisplayType = Field(default=NameDisplayType.FULL, description="Display mode to preview")
    pseudonym: str | None = Field(default=None, max_length=100, description="Pseudonym for pseudonym mode")


class NameDisplayPreviewResponse(BaseModel):
    """Rendered name display preview."""

    display_name: str = Field(description="Name as contacts would see it")
