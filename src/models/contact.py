"""Contact relationship and invitation type definitions."""

from datetime import datetime
from enum import Enum
from typing import TypedDict
from uuid import UUID


class RelationshipType(str, Enum):
    """Relationship labels a user assigns to one of their contacts."""

    PERSONAL = "personal"
    PROFESSIONAL = "professional"
    BOTH = "both"
    ACADEMIC = "academic"
    BASIC = "basic"


class ProfileVisibility(str, Enum):
    """Descriptive visibility level recorded on a relationship."""

    BASIC = "basic"
    FULL = "full"
    CUSTOM = "custom"


class VisibilityLevel(str, Enum):
    """Access level an invitation grants, as <category>-<detail>."""

    GENERAL_NON_SPECIFIC = "general-non-specific"
    GENERAL_SPECIFIC = "general-specific"
    PERSONAL_NON_SPECIFIC = "personal-non-specific"
    PERSONAL_SPECIFIC = "personal-specific"
    PROFESSIONAL_NON_SPECIFIC = "professional-non-specific"
    PROFESSIONAL_SPECIFIC = "professional-specific"
    ACADEMIC_NON_SPECIFIC = "academic-non-specific"
    ACADEMIC_SPECIFIC = "academic-specific"

    @property
    def category(self) -> str:
        """Information category part of the level."""
        return self.value.split("-", 1)[0]

    @property
    def is_specific(self) -> bool:
        """Whether specific details are shared, not just general descriptors."""
        return self.value.split("-", 1)[1] == "specific"


class CustomVisibilitySettings(TypedDict, total=False):
    """Category flags recorded when a relationship comes from an invitation."""

    allow_general_info: bool
    allow_personal_info: bool
    allow_professional_info: bool
    allow_specific_details: bool


class ContactRelationship(TypedDict):
    """Contact relationship table row representation.

    One row per ordered (user_id, contact_id) pair. Describes how user_id
    relates to contact_id; the reverse direction is a separate row.
    """

    id: int
    user_id: UUID
    contact_id: UUID
    relationship_type: str
    profile_visibility: str
    custom_visibility_settings: CustomVisibilitySettings | None
    added_at: datetime
    updated_at: datetime


class ContactInvitation(TypedDict):
    """Contact invitation table row representation."""

    id: int
    invite_code: str
    invite_url: str
    inviter_user_id: UUID
    invitee_name: str | None
    invitee_email: str | None
    visibility_level: str
    custom_message: str | None
    name_display_override: str | None
    custom_pseudonym: str | None
    expires_at: datetime | None
    max_uses: int
    current_uses: int
    is_active: bool
    used_at: datetime | None
    created_at: datetime
