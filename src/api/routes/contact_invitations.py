"""Contact invitation API routes for sharing join links."""

from fastapi import APIRouter, status

from src.api.deps import CurrentUser
from src.api.middleware.error_handler import NotFoundError
from src.schemas.invitation import (
    ContactInvitationCreate,
    ContactInvitationPublic,
    ContactInvitationResponse,
)
from src.services.invitation_service import ContactInvitationService

router = APIRouter(prefix="/contact-invitations", tags=["contact-invitations"])


@router.post(
    "",
    response_model=ContactInvitationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create contact invitation",
    description="Creates a join link that adds whoever accepts it as a contact.",
)
async def create_invitation(
    data: ContactInvitationCreate,
    user: CurrentUser,
) -> ContactInvitationResponse:
    """Create a contact invitation.

    Args:
        data: Invitation options.
        user: The authenticated user context.

    Returns:
        ContactInvitationResponse: The invitation with its join link.
    """
    service = ContactInvitationService()
    invitation = await service.create_invitation(user.user_id, data)
    return ContactInvitationResponse(**invitation)


@router.get(
    "",
    response_model=list[ContactInvitationResponse],
    summary="List my invitations",
    description="Returns all invitations the authenticated user has created.",
)
async def list_my_invitations(user: CurrentUser) -> list[ContactInvitationResponse]:
    """List the authenticated user's invitations."""
    service = ContactInvitationService()
    invitations = await service.list_invitations(user.user_id)
    return [ContactInvitationResponse(**invitation) for invitation in invitations]


@router.get(
    "/{invite_code}",
    response_model=ContactInvitationPublic,
    summary="Look up invitation",
    description="Returns public details of an active invitation. No authentication required.",
)
async def get_invitation(invite_code: str) -> ContactInvitationPublic:
    """Look up an invitation by code.

    Raises:
        NotFoundError: If the invitation is unknown or inactive.
    """
    service = ContactInvitationService()
    invitation = await service.get_by_code(invite_code)

    if not invitation:
        raise NotFoundError("Invitation not found")

    return ContactInvitationPublic(**invitation)


@router.post(
    "/{invite_code}/accept",
    response_model=ContactInvitationResponse,
    summary="Accept invitation",
    description="Accepts an invitation, connecting you and the inviter as contacts.",
)
async def accept_invitation(
    invite_code: str,
    user: CurrentUser,
) -> ContactInvitationResponse:
    """Accept a contact invitation.

    Args:
        invite_code: Code from the join link.
        user: The authenticated user context.

    Returns:
        ContactInvitationResponse: The invitation with updated usage.

    Raises:
        NotFoundError: If the invitation is unknown or inactive.
        ValidationError: If it is expired, used up, or your own.
    """
    service = ContactInvitationService()
    invitation = await service.accept_invitation(invite_code, user.user_id)
    return ContactInvitationResponse(**invitation)


@router.patch(
    "/{invitation_id}/deactivate",
    response_model=ContactInvitationResponse,
    summary="Deactivate invitation",
    description="Stops an invitation from being used.",
)
async def deactivate_invitation(
    invitation_id: int,
    user: CurrentUser,
) -> ContactInvitationResponse:
    """Deactivate one of your invitations.

    Raises:
        NotFoundError: If the invitation does not exist.
        AuthorizationError: If it belongs to someone else.
    """
    service = ContactInvitationService()
    invitation = await service.deactivate_invitation(invitation_id, user.user_id)
    return ContactInvitationResponse(**invitation)
