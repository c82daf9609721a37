"""Contact relationship and per-contact privacy API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, status

from src.api.deps import CurrentUser
from src.api.middleware.error_handler import NotFoundError
from src.schemas.common import MessageResponse
from src.schemas.contact import (
    ContactCreate,
    ContactOverride,
    ContactOverrideResponse,
    ContactOverrideUpdate,
    ContactResponse,
    ContactUpdate,
    FieldOverrideRequest,
)
from src.services.contact_service import ContactService
from src.services.profile_service import ProfileService
from src.services.visibility_fields import OVERRIDABLE_FIELD_NAMES

router = APIRouter(prefix="/contacts", tags=["contacts"])


def _override_response(contact_id: UUID, override: ContactOverride) -> ContactOverrideResponse:
    return ContactOverrideResponse(contact_id=contact_id, **override.model_dump())


@router.get(
    "",
    response_model=list[ContactResponse],
    summary="List contacts",
    description="Returns the authenticated user's contact relationships, newest first.",
)
async def list_contacts(user: CurrentUser) -> list[ContactResponse]:
    """List the authenticated user's contacts."""
    service = ContactService()
    relationships = await service.list_relationships(user.user_id)
    return [ContactResponse(**relationship) for relationship in relationships]


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add contact",
    description="Adds a user as a contact with the given relationship type.",
)
async def add_contact(data: ContactCreate, user: CurrentUser) -> ContactResponse:
    """Add a contact.

    Args:
        data: Contact and relationship details.
        user: The authenticated user context.

    Returns:
        ContactResponse: The created relationship.

    Raises:
        ValidationError: If adding yourself.
        ConflictError: If the contact already exists.
    """
    service = ContactService()
    relationship = await service.add_relationship(user.user_id, data)
    return ContactResponse(**relationship)


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Get contact",
    description="Returns the authenticated user's relationship to one contact.",
)
async def get_contact(contact_id: UUID, user: CurrentUser) -> ContactResponse:
    """Get one contact relationship.

    Raises:
        NotFoundError: If the contact does not exist.
    """
    service = ContactService()
    relationship = await service.get_relationship(user.user_id, contact_id)

    if not relationship:
        raise NotFoundError("Contact not found")

    return ContactResponse(**relationship)


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Update contact",
    description="Changes the relationship type or visibility label of a contact.",
)
async def update_contact(
    contact_id: UUID,
    data: ContactUpdate,
    user: CurrentUser,
) -> ContactResponse:
    """Update a contact relationship.

    Args:
        contact_id: The contact's user id.
        data: Fields to update.
        user: The authenticated user context.

    Returns:
        ContactResponse: The updated relationship.

    Raises:
        NotFoundError: If the contact does not exist.
    """
    service = ContactService()
    relationship = await service.update_relationship(user.user_id, contact_id, data)
    return ContactResponse(**relationship)


@router.delete(
    "/{contact_id}",
    response_model=MessageResponse,
    summary="Remove contact",
    description="Removes a contact. Their per-contact privacy settings are kept.",
)
async def remove_contact(contact_id: UUID, user: CurrentUser) -> MessageResponse:
    """Remove a contact.

    Raises:
        NotFoundError: If the contact does not exist.
    """
    service = ContactService()
    await service.remove_relationship(user.user_id, contact_id)
    return MessageResponse(message="Contact removed")


@router.get(
    "/{contact_id}/privacy",
    response_model=ContactOverrideResponse,
    summary="Get contact privacy settings",
    description=(
        "Returns the privacy exceptions you have set for one contact. "
        "A contact without exceptions gets an empty record."
    ),
)
async def get_contact_privacy(contact_id: UUID, user: CurrentUser) -> ContactOverrideResponse:
    """Get the privacy override for a contact."""
    service = ProfileService()
    override = await service.get_contact_override(user.user_id, contact_id)
    return _override_response(contact_id, override or ContactOverride())


@router.put(
    "/{contact_id}/privacy",
    response_model=ContactOverrideResponse,
    summary="Set contact privacy settings",
    description=(
        "Replaces the privacy exceptions for one contact. A field listed in both "
        "hide_fields and show_fields is kept as shown."
    ),
)
async def set_contact_privacy(
    contact_id: UUID,
    data: ContactOverrideUpdate,
    user: CurrentUser,
) -> ContactOverrideResponse:
    """Replace the privacy override for a contact.

    Args:
        contact_id: The contact the settings apply to.
        data: New settings.
        user: The authenticated user context.

    Returns:
        ContactOverrideResponse: The stored settings.

    Raises:
        NotFoundError: If the user has no profile.
    """
    service = ProfileService()
    override = await service.set_contact_override(user.user_id, contact_id, data)
    return _override_response(contact_id, override)


@router.patch(
    "/{contact_id}/privacy/fields/{field_name}",
    response_model=ContactOverrideResponse,
    summary="Set one field for a contact",
    description="Hides or force-shows one profile field for a contact, or resets it to follow category settings.",
)
async def set_contact_field(
    contact_id: UUID,
    data: FieldOverrideRequest,
    user: CurrentUser,
    field_name: str = Path(description="Profile field name"),
) -> ContactOverrideResponse:
    """Change a single field in a contact's privacy override.

    Raises:
        HTTPException: 422 if the field is not visibility-controlled.
        NotFoundError: If the user has no profile.
    """
    if field_name not in OVERRIDABLE_FIELD_NAMES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown profile field: {field_name}",
        )

    service = ProfileService()
    override = await service.set_contact_field_mode(user.user_id, contact_id, field_name, data.mode)
    return _override_response(contact_id, override)


@router.delete(
    "/{contact_id}/privacy",
    response_model=MessageResponse,
    summary="Clear contact privacy settings",
    description="Removes all privacy exceptions for one contact.",
)
async def clear_contact_privacy(contact_id: UUID, user: CurrentUser) -> MessageResponse:
    """Clear the privacy override for a contact.

    Raises:
        NotFoundError: If no settings exist for the contact.
    """
    service = ProfileService()
    await service.clear_contact_override(user.user_id, contact_id)
    return MessageResponse(message="Privacy settings cleared")
