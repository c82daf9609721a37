"""Profile business logic service."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import ConflictError, NotFoundError
from src.core.supabase import get_supabase_client
from src.models.profile import UserProfile
from src.schemas.contact import (
    ContactOverride,
    ContactOverrideUpdate,
    FieldOverrideMode,
    parse_contact_overrides,
)
from src.schemas.profile import ProfileCreate, ProfileUpdate
from src.services.contact_privacy import normalize_override, set_field_mode
from src.services.contact_service import ContactService
from src.services.visibility import resolve_visible_profile

logger = logging.getLogger(__name__)

PROFILES_TABLE = "user_profiles"


class ProfileService:
    """Service for managing user profiles and their per-contact overrides."""

    def __init__(self) -> None:
        """Initialize profile service with Supabase client."""
        self.client = get_supabase_client()

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Get a profile by user ID.

        Args:
            user_id: The profile owner's user ID.

        Returns:
            UserProfile | None: The profile row or None if not found.
        """
        response = (
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )

        return response.data[0] if response.data else None

    async def create_profile(self, user_id: UUID, data: ProfileCreate) -> UserProfile:
        """Create a profile for a user.

        Args:
            user_id: The owner's user ID.
            data: Initial profile content and settings.

        Returns:
            UserProfile: The created profile.

        Raises:
            ConflictError: If the user already has a profile.
        """
        if await self.get_profile(user_id):
            raise ConflictError("Profile already exists")

        profile_data = {
            **data.model_dump(mode="json", exclude_none=True),
            "user_id": str(user_id),
            "contact_privacy_settings": {},
        }

        response = self.client.table(PROFILES_TABLE).insert(profile_data).execute()

        logger.info("Created profile for user %s", user_id)
        return response.data[0]

    async def update_profile(self, user_id: UUID, data: ProfileUpdate) -> UserProfile:
        """Apply a partial update to a profile.

        Args:
            user_id: The owner's user ID.
            data: The fields to update.

        Returns:
            UserProfile: The updated profile.

        Raises:
            NotFoundError: If the user has no profile.
        """
        update_data = data.model_dump(mode="json", exclude_unset=True)

        if not update_data:
            profile = await self.get_profile(user_id)
            if not profile:
                raise NotFoundError("Profile not found")
            return profile

        return await self._write(user_id, update_data)

    async def get_visible_profile(self, viewer_id: UUID, target_id: UUID) -> dict[str, Any]:
        """Get the projection of target_id's profile that viewer_id may see.

        Args:
            viewer_id: The requesting user.
            target_id: The user being viewed.

        Returns:
            dict: user_id, display_name and the visible fields.

        Raises:
            NotFoundError: If the target has no profile.
        """
        profile = await self.get_profile(target_id)
        if not profile:
            raise NotFoundError("No profile available")

        relationship = await ContactService().get_relationship(viewer_id, target_id)
        overrides = parse_contact_overrides(profile.get("contact_privacy_settings"))

        logger.debug(
            "Resolving profile %s for viewer %s (relationship=%s, override=%s)",
            target_id,
            viewer_id,
            relationship["relationship_type"] if relationship else None,
            viewer_id in overrides,
        )
        return resolve_visible_profile(viewer_id, profile, relationship, overrides)

    async def get_contact_override(self, owner_id: UUID, contact_id: UUID) -> ContactOverride | None:
        """Get the override owner_id has set for contact_id, if any."""
        profile = await self._require_profile(owner_id)
        return parse_contact_overrides(profile.get("contact_privacy_settings")).get(contact_id)

    async def set_contact_override(
        self,
        owner_id: UUID,
        contact_id: UUID,
        update: ContactOverrideUpdate,
    ) -> ContactOverride:
        """Replace the override for one contact.

        Args:
            owner_id: The profile owner.
            contact_id: The contact the override applies to.
            update: The new override.

        Returns:
            ContactOverride: The stored, normalized override.

        Raises:
            NotFoundError: If the owner has no profile.
        """
        profile = await self._require_profile(owner_id)
        override = normalize_override(update)
        await self._store_override(owner_id, profile, contact_id, override)
        return override

    async def set_contact_field_mode(
        self,
        owner_id: UUID,
        contact_id: UUID,
        field_name: str,
        mode: FieldOverrideMode,
    ) -> ContactOverride:
        """Hide, force-show or reset one field for one contact.

        Raises:
            NotFoundError: If the owner has no profile.
        """
        profile = await self._require_profile(owner_id)
        current = parse_contact_overrides(profile.get("contact_privacy_settings")).get(contact_id)
        override = set_field_mode(current, field_name, mode)
        await self._store_override(owner_id, profile, contact_id, override)
        return override

    async def clear_contact_override(self, owner_id: UUID, contact_id: UUID) -> None:
        """Remove the override for one contact.

        Raises:
            NotFoundError: If the owner has no profile or no override for the contact.
        """
        profile = await self._require_profile(owner_id)
        settings = dict(profile.get("contact_privacy_settings") or {})

        if settings.pop(str(contact_id), None) is None:
            raise NotFoundError("No privacy settings for this contact")

        await self._write(owner_id, {"contact_privacy_settings": settings})
        logger.info("Cleared privacy settings for contact %s on profile %s", contact_id, owner_id)

    async def _require_profile(self, user_id: UUID) -> UserProfile:
        profile = await self.get_profile(user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    async def _store_override(
        self,
        owner_id: UUID,
        profile: UserProfile,
        contact_id: UUID,
        override: ContactOverride,
    ) -> None:
        settings = dict(profile.get("contact_privacy_settings") or {})
        settings[str(contact_id)] = override.model_dump(mode="json", exclude_none=True)
        await self._write(owner_id, {"contact_privacy_settings": settings})
        logger.info("Updated privacy settings for contact %s on profile %s", contact_id, owner_id)

    async def _write(self, user_id: UUID, update_data: dict[str, Any]) -> UserProfile:
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        response = (
            self.client.table(PROFILES_TABLE)
            .update(update_data)
            .eq("user_id", str(user_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Profile not found")
        return response.data[0]
