"""Contact invitation business logic service."""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import AuthorizationError, NotFoundError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.contact import (
    ContactInvitation,
    CustomVisibilitySettings,
    ProfileVisibility,
    RelationshipType,
    VisibilityLevel,
)
from src.schemas.invitation import ContactInvitationCreate
from src.services.contact_service import ContactService

logger = logging.getLogger(__name__)

INVITATIONS_TABLE = "contact_invitations"
PROFILES_TABLE = "user_profiles"
INVITE_CODE_PREFIX = "inv_"


def generate_invite_code() -> str:
    """Generate a URL-safe invitation code."""
    return f"{INVITE_CODE_PREFIX}{secrets.token_hex(12)}"


def relationship_type_for_level(level: VisibilityLevel) -> RelationshipType:
    """Relationship type created when an invitation at this level is accepted."""
    if level.category == RelationshipType.PERSONAL.value:
        return RelationshipType.PERSONAL
    if level.category == RelationshipType.PROFESSIONAL.value:
        return RelationshipType.PROFESSIONAL
    return RelationshipType.BOTH


def visibility_settings_for_level(level: VisibilityLevel) -> CustomVisibilitySettings:
    """Category flags recorded on the inviter's relationship to the invitee."""
    return {
        "allow_general_info": True,
        "allow_personal_info": level.category == "personal",
        "allow_professional_info": level.category == "professional",
        "allow_specific_details": level.is_specific,
    }


def _parse_timestamp(value: str | datetime | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ContactInvitationService:
    """Service for creating and redeeming contact invitations."""

    def __init__(self) -> None:
        """Initialize invitation service with Supabase client."""
        self.client = get_supabase_client()

    async def create_invitation(
        self,
        inviter_id: UUID,
        data: ContactInvitationCreate,
    ) -> ContactInvitation:
        """Create a shareable contact invitation.

        Args:
            inviter_id: The user sending the invitation.
            data: Invitation options.

        Returns:
            ContactInvitation: The created invitation, including its join link.
        """
        settings = get_settings()
        invite_code = generate_invite_code()
        expire_days = data.expires_in_days or settings.invitation_expire_days
        expires_at = datetime.now(timezone.utc) + timedelta(days=expire_days)

        invitation_data = {
            "invite_code": invite_code,
            "invite_url": f"{settings.invitation_base_url.rstrip('/')}/join/{invite_code}",
            "inviter_user_id": str(inviter_id),
            "invitee_name": data.invitee_name,
            "invitee_email": data.invitee_email,
            "visibility_level": data.visibility_level.value,
            "custom_message": data.custom_message,
            "name_display_override": data.name_display_override.value if data.name_display_override else None,
            "custom_pseudonym": data.custom_pseudonym,
            "expires_at": expires_at.isoformat(),
            "max_uses": data.max_uses,
            "current_uses": 0,
            "is_active": True,
        }

        response = self.client.table(INVITATIONS_TABLE).insert(invitation_data).execute()

        logger.info("Created contact invitation %s for user %s", invite_code, inviter_id)
        return response.data[0]

    async def list_invitations(self, inviter_id: UUID) -> list[ContactInvitation]:
        """List invitations a user has created, newest first."""
        response = (
            self.client.table(INVITATIONS_TABLE)
            .select("*")
            .eq("inviter_user_id", str(inviter_id))
            .order("created_at", desc=True)
            .execute()
        )

        return response.data or []

    async def get_by_code(self, invite_code: str) -> ContactInvitation | None:
        """Get an active invitation by its code.

        Args:
            invite_code: Code from the join link.

        Returns:
            ContactInvitation | None: The invitation, or None if unknown or inactive.
        """
        response = (
            self.client.table(INVITATIONS_TABLE)
            .select("*")
            .eq("invite_code", invite_code)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )

        return response.data[0] if response.data else None

    async def accept_invitation(self, invite_code: str, user_id: UUID) -> ContactInvitation:
        """Accept an invitation and connect the two users.

        Creates the inviter's relationship to the new contact with the
        invitation's category flags and the new contact's relationship back
        to the inviter. Existing relationships in either direction are kept.

        Args:
            invite_code: Code from the join link.
            user_id: The user accepting the invitation.

        Returns:
            ContactInvitation: The invitation with updated usage.

        Raises:
            NotFoundError: If the invitation is unknown or inactive.
            ValidationError: If it is expired, used up, or the user's own.
        """
        invitation = await self.get_by_code(invite_code)

        if not invitation:
            raise NotFoundError("Invitation not found")

        expires_at = _parse_timestamp(invitation.get("expires_at"))
        if expires_at and datetime.now(timezone.utc) > expires_at:
            raise ValidationError("Invitation has expired")

        current_uses = invitation.get("current_uses") or 0
        max_uses = invitation.get("max_uses") or 1
        if current_uses >= max_uses:
            raise ValidationError("Invitation has reached maximum uses")

        inviter_id = UUID(str(invitation["inviter_user_id"]))
        if inviter_id == user_id:
            raise ValidationError("You cannot accept your own invitation")

        level = VisibilityLevel(invitation["visibility_level"])
        relationship_type = relationship_type_for_level(level)
        contacts = ContactService()

        if not await contacts.get_relationship(inviter_id, user_id):
            await contacts.insert_relationship(
                {
                    "user_id": str(inviter_id),
                    "contact_id": str(user_id),
                    "relationship_type": relationship_type.value,
                    "profile_visibility": ProfileVisibility.CUSTOM.value,
                    "custom_visibility_settings": visibility_settings_for_level(level),
                }
            )

        if not await contacts.get_relationship(user_id, inviter_id):
            await contacts.insert_relationship(
                {
                    "user_id": str(user_id),
                    "contact_id": str(inviter_id),
                    "relationship_type": relationship_type.value,
                    "profile_visibility": ProfileVisibility.BASIC.value,
                }
            )

        if invitation.get("name_display_override"):
            await self._apply_name_override(inviter_id, user_id, invitation)

        uses = current_uses + 1
        response = (
            self.client.table(INVITATIONS_TABLE)
            .update(
                {
                    "current_uses": uses,
                    "used_at": datetime.now(timezone.utc).isoformat(),
                    "is_active": uses < max_uses,
                }
            )
            .eq("id", invitation["id"])
            .execute()
        )

        logger.info("User %s accepted invitation %s from %s", user_id, invite_code, inviter_id)
        return response.data[0]

    async def deactivate_invitation(self, invitation_id: int, user_id: UUID) -> ContactInvitation:
        """Deactivate an invitation so its link stops working.

        Raises:
            NotFoundError: If the invitation does not exist.
            AuthorizationError: If the user did not create it.
        """
        response = (
            self.client.table(INVITATIONS_TABLE)
            .select("*")
            .eq("id", invitation_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            raise NotFoundError("Invitation not found")

        if str(response.data[0]["inviter_user_id"]) != str(user_id):
            raise AuthorizationError("You can only deactivate your own invitations")

        response = (
            self.client.table(INVITATIONS_TABLE)
            .update({"is_active": False})
            .eq("id", invitation_id)
            .execute()
        )

        logger.info("Deactivated invitation %s", invitation_id)
        return response.data[0]

    async def _apply_name_override(
        self,
        inviter_id: UUID,
        contact_id: UUID,
        invitation: ContactInvitation,
    ) -> None:
        response = (
            self.client.table(PROFILES_TABLE)
            .select("contact_privacy_settings")
            .eq("user_id", str(inviter_id))
            .limit(1)
            .execute()
        )

        if not response.data:
            logger.warning("Inviter %s has no profile; skipping name display override", inviter_id)
            return

        settings = dict(response.data[0].get("contact_privacy_settings") or {})
        entry: dict[str, Any] = dict(settings.get(str(contact_id)) or {})
        entry["name_display_type"] = invitation["name_display_override"]
        if invitation.get("custom_pseudonym"):
            entry["custom_pseudonym"] = invitation["custom_pseudonym"]
        settings[str(contact_id)] = entry

        (
            self.client.table(PROFILES_TABLE)
            .update({"contact_privacy_settings": settings})
            .eq("user_id", str(inviter_id))
            .execute()
        )
