"""Contact relationship business logic service."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from src.core.supabase import get_supabase_client
from src.models.contact import ContactRelationship
from src.schemas.contact import ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)

RELATIONSHIPS_TABLE = "contact_relationships"


class ContactService:
    """Service for managing directed contact relationships."""

    def __init__(self) -> None:
        """Initialize contact service with Supabase client."""
        self.client = get_supabase_client()

    async def get_relationship(self, user_id: UUID, contact_id: UUID) -> ContactRelationship | None:
        """Get the relationship user_id holds towards contact_id.

        Args:
            user_id: The relationship owner (the viewer, for visibility checks).
            contact_id: The contact (the profile being viewed).

        Returns:
            ContactRelationship | None: The relationship row or None if absent.
        """
        response = (
            self.client.table(RELATIONSHIPS_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("contact_id", str(contact_id))
            .limit(1)
            .execute()
        )

        return response.data[0] if response.data else None

    async def list_relationships(self, user_id: UUID) -> list[ContactRelationship]:
        """List all relationships a user holds, newest first."""
        response = (
            self.client.table(RELATIONSHIPS_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("added_at", desc=True)
            .execute()
        )

        return response.data or []

    async def add_relationship(self, user_id: UUID, data: ContactCreate) -> ContactRelationship:
        """Add a contact.

        Args:
            user_id: The user adding the contact.
            data: Contact and relationship details.

        Returns:
            ContactRelationship: The created relationship.

        Raises:
            ValidationError: If adding yourself.
            ConflictError: If the contact was already added.
        """
        if data.contact_id == user_id:
            raise ValidationError("You cannot add yourself as a contact")

        if await self.get_relationship(user_id, data.contact_id):
            raise ConflictError("Contact already added")

        return await self.insert_relationship(
            {
                "user_id": str(user_id),
                "contact_id": str(data.contact_id),
                "relationship_type": data.relationship_type.value,
                "profile_visibility": data.profile_visibility.value,
                "custom_visibility_settings": data.custom_visibility_settings,
            }
        )

    async def insert_relationship(self, row: dict[str, Any]) -> ContactRelationship:
        """Insert a relationship row without duplicate checks."""
        response = self.client.table(RELATIONSHIPS_TABLE).insert(row).execute()

        logger.info(
            "Added %s contact %s for user %s",
            row["relationship_type"],
            row["contact_id"],
            row["user_id"],
        )
        return response.data[0]

    async def update_relationship(
        self,
        user_id: UUID,
        contact_id: UUID,
        data: ContactUpdate,
    ) -> ContactRelationship:
        """Update a relationship's type or visibility label.

        Args:
            user_id: The relationship owner.
            contact_id: The contact.
            data: Fields to change.

        Returns:
            ContactRelationship: The updated relationship.

        Raises:
            NotFoundError: If the relationship does not exist.
        """
        update_data = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)

        if not update_data:
            relationship = await self.get_relationship(user_id, contact_id)
            if not relationship:
                raise NotFoundError("Contact not found")
            return relationship

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        response = (
            self.client.table(RELATIONSHIPS_TABLE)
            .update(update_data)
            .eq("user_id", str(user_id))
            .eq("contact_id", str(contact_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Contact not found")

        logger.info("Updated contact %s for user %s: %s", contact_id, user_id, sorted(update_data))
        return response.data[0]

    async def remove_relationship(self, user_id: UUID, contact_id: UUID) -> None:
        """Remove a contact.

        Raises:
            NotFoundError: If the relationship does not exist.
        """
        response = (
            self.client.table(RELATIONSHIPS_TABLE)
            .delete()
            .eq("user_id", str(user_id))
            .eq("contact_id", str(contact_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Contact not found")

        logger.info("Removed contact %s for user %s", contact_id, user_id)
