"""Contact relationship and privacy override schemas."""

import logging
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.models.contact import ProfileVisibility, RelationshipType
from src.models.profile import NameDisplayType
from src.services.visibility_fields import OVERRIDABLE_FIELD_NAMES

logger = logging.getLogger(__name__)


class ContactOverride(BaseModel):
    """Per-contact exception record stored on the profile owner's row.

    Read leniently: stored values are not re-validated, so an unknown
    name_display_type survives here and falls back to the full name later.
    """

    model_config = ConfigDict(extra="ignore")

    allow_personal_info: bool | None = Field(default=None, description="False denies personal info to this contact")
    allow_professional_info: bool | None = Field(
        default=None, description="False denies professional info to this contact"
    )
    hide_fields: list[str] = Field(default_factory=list, description="Fields always hidden from this contact")
    show_fields: list[str] = Field(default_factory=list, description="Fields always shown to this contact")
    name_display_type: str | None = Field(default=None, description="Name display mode for this contact")
    custom_pseudonym: str | None = Field(default=None, description="Pseudonym shown to this contact")
    custom_note: str | None = Field(default=None, description="Owner's note about this contact's access")

    @field_validator("hide_fields", "show_fields", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        """Treat a stored null list as empty."""
        return [] if value is None else value


def parse_contact_overrides(raw: dict[str, Any] | None) -> dict[UUID, ContactOverride]:
    """Parse a stored contact_privacy_settings map into typed overrides.

    Entries whose key is not a user id cannot match any viewer and are
    dropped with a warning, as are entries whose value does not parse. One
    bad entry never affects the others.

    Args:
        raw: The JSON map as stored, keyed by contact id strings.

    Returns:
        dict[UUID, ContactOverride]: Overrides keyed by contact user id.
    """
    overrides: dict[UUID, ContactOverride] = {}
    for key, value in (raw or {}).items():
        try:
            contact_id = UUID(str(key))
        except ValueError:
            logger.warning("Ignoring contact privacy entry with invalid key: %s", key)
            continue
        try:
            overrides[contact_id] = ContactOverride.model_validate(value or {})
        except ValidationError as e:
            logger.warning(
                "Ignoring malformed contact privacy entry for %s: %d errors",
                contact_id,
                e.error_count(),
            )
    return overrides


class ContactOverrideUpdate(BaseModel):
    """Request body replacing the override for one contact.

    A field listed in both hide_fields and show_fields is kept as shown.
    """

    allow_personal_info: bool | None = Field(default=None, description="False denies personal info")
    allow_professional_info: bool | None = Field(default=None, description="False denies professional info")
    hide_fields: list[str] = Field(default_factory=list, description="Fields to hide from this contact")
    show_fields: list[str] = Field(default_factory=list, description="Fields to force-show to this contact")
    name_display_type: NameDisplayType | None = Field(default=None, description="Name display mode")
    custom_pseudonym: str | None = Field(default=None, max_length=100, description="Pseudonym for this contact")
    custom_note: str | None = Field(default=None, max_length=500, description="Private note")

    @field_validator("hide_fields", "show_fields")
    @classmethod
    def known_fields_only(cls, value: list[str]) -> list[str]:
        """Reject field names that are not visibility-controlled."""
        unknown = sorted(set(value) - OVERRIDABLE_FIELD_NAMES)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(unknown)}")
        return value


class ContactOverrideResponse(ContactOverride):
    """Override as returned to the profile owner."""

    contact_id: UUID = Field(description="Contact the override applies to")


class FieldOverrideMode(str, Enum):
    """Per-field choice for one contact."""

    HIDE = "hide"
    SHOW = "show"
    DEFAULT = "default"


class FieldOverrideRequest(BaseModel):
    """Request to hide, force-show or reset one field for a contact."""

    mode: FieldOverrideMode = Field(description="hide, show, or default to follow category settings")


class ContactCreate(BaseModel):
    """Schema for adding a contact."""

    contact_id: UUID = Field(description="User id of the contact to add")
    relationship_type: RelationshipType = Field(description="How you relate to this contact")
    profile_visibility: ProfileVisibility = Field(default=ProfileVisibility.BASIC, description="Visibility label")
    custom_visibility_settings: dict[str, Any] | None = Field(default=None, description="Custom visibility flags")


class ContactUpdate(BaseModel):
    """Schema for updating a contact relationship.

    All fields are optional for partial updates.
    """

    relationship_type: RelationshipType | None = Field(default=None, description="New relationship type")
    profile_visibility: ProfileVisibility | None = Field(default=None, description="New visibility label")
    custom_visibility_settings: dict[str, Any] | None = Field(default=None, description="Custom visibility flags")


class ContactResponse(BaseModel):
    """Schema for contact relationship responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Relationship identifier")
    user_id: UUID = Field(description="Owner of the relationship")
    contact_id: UUID = Field(description="The contact")
    relationship_type: str = Field(description="Relationship type")
    profile_visibility: str = Field(description="Visibility label")
    custom_visibility_settings: dict[str, Any] | None = Field(default=None, description="Custom visibility flags")
    added_at: datetime | None = Field(default=None, description="When the contact was added")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
