"""Profile model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import Any, TypedDict
from uuid import UUID


class NameDisplayType(str, Enum):
    """How a user's name is shown to a contact."""

    FULL = "full"
    FIRST_INITIAL_LAST = "first_initial_last"
    FIRST_LAST_INITIAL = "first_last_initial"
    PSEUDONYM = "pseudonym"


class AgeDisclosure(str, Enum):
    """How much age information a user discloses."""

    SPECIFIC = "specific"
    ADULT_MINOR = "adult_minor"
    PRIVATE = "private"


class AgeCategory(str, Enum):
    """Coarse age bracket shown under adult/minor disclosure."""

    ADULT = "adult"
    MINOR = "minor"


class WorkHistoryEntry(TypedDict, total=False):
    """One position in a user's work history."""

    company: str
    position: str
    start_date: str
    end_date: str
    description: str
    current: bool


class UserProfile(TypedDict, total=False):
    """User profile table row representation.

    Represents a row of the user_profiles table. Every show_* toggle
    defaults to true in the database. contact_privacy_settings is keyed by
    the contact's user id rendered as a string.
    """

    id: int
    user_id: UUID
    full_name: str | None
    username: str | None

    # General
    education: str | None
    skills: str | None
    languages: str | None
    general_location: str | None
    certifications: str | None
    achievements: str | None

    # Personal
    personal_interests: str | None
    personal_bio: str | None
    personal_website: str | None
    marital_status: str | None
    personal_pictures: list[str]
    primary_personal_pic: int | None
    age: int | None
    age_disclosure: str | None
    age_category: str | None
    gender: str | None

    # Professional
    job_title: str | None
    company: str | None
    professional_bio: str | None
    work_experience: str | None
    professional_website: str | None
    linkedin_profile: str | None
    professional_pictures: list[str]
    primary_professional_pic: int | None
    work_history: list[WorkHistoryEntry]

    # Visibility toggles
    show_demographics: bool
    show_education: bool
    show_skills: bool
    show_languages: bool
    show_certifications: bool
    show_achievements: bool
    show_location: bool
    show_personal_interests: bool
    show_personal_bio: bool
    show_personal_website: bool
    show_relationship_status: bool
    show_personal_pictures: bool
    show_job_info: bool
    show_professional_bio: bool
    show_work_experience: bool
    show_professional_websites: bool
    show_work_history: bool
    show_professional_pictures: bool

    # Per-contact overrides and name display defaults
    contact_privacy_settings: dict[str, dict[str, Any]]
    default_name_display: str | None
    default_pseudonym: str | None

    created_at: datetime
    updated_at: datetime
