"""Contact invitation Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.contact import VisibilityLevel
from src.models.profile import NameDisplayType


class ContactInvitationCreate(BaseModel):
    """Schema for creating a contact invitation."""

    invitee_name: str | None = Field(default=None, max_length=255, description="Name of the person invited")
    invitee_email: EmailStr | None = Field(default=None, description="Email of the person invited")
    visibility_level: VisibilityLevel = Field(
        default=VisibilityLevel.GENERAL_NON_SPECIFIC,
        description="Access the invitee gets once they join",
    )
    custom_message: str | None = Field(default=None, max_length=1000, description="Message shown to the invitee")
    name_display_override: NameDisplayType | None = Field(
        default=None, description="How your name is shown to the invitee"
    )
    custom_pseudonym: str | None = Field(default=None, max_length=100, description="Pseudonym shown to the invitee")
    expires_in_days: int | None = Field(
        default=None, ge=1, le=365, description="Days until expiry (server default if omitted)"
    )
    max_uses: int = Field(default=1, ge=1, le=100, description="How many people can use this invitation")


class ContactInvitationResponse(BaseModel):
    """Schema for contact invitation responses to the inviter."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Invitation identifier")
    invite_code: str = Field(description="Code used in the join link")
    invite_url: str = Field(description="Join link to share or encode as a QR code")
    inviter_user_id: UUID = Field(description="User who created the invitation")
    invitee_name: str | None = Field(default=None, description="Name of the person invited")
    invitee_email: str | None = Field(default=None, description="Email of the person invited")
    visibility_level: str = Field(description="Access level granted")
    custom_message: str | None = Field(default=None, description="Message shown to the invitee")
    name_display_override: str | None = Field(default=None, description="Name display mode for the invitee")
    custom_pseudonym: str | None = Field(default=None, description="Pseudonym shown to the invitee")
    expires_at: datetime | None = Field(default=None, description="Expiration timestamp")
    max_uses: int = Field(description="Maximum number of uses")
    current_uses: int = Field(description="Times the invitation has been used")
    is_active: bool = Field(description="Whether the invitation can still be used")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")


class ContactInvitationPublic(BaseModel):
    """Invitation details shown to someone opening a join link."""

    model_config = ConfigDict(from_attributes=True)

    invite_code: str = Field(description="Invitation code")
    inviter_user_id: UUID = Field(description="User who sent the invitation")
    invitee_name: str | None = Field(default=None, description="Name of the person invited")
    visibility_level: str = Field(description="Access level granted")
    custom_message: str | None = Field(default=None, description="Message from the inviter")
    expires_at: datetime | None = Field(default=None, description="Expiration timestamp")
