"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, status

from src.api.deps import CurrentUser
from src.api.middleware.error_handler import NotFoundError
from src.schemas.profile import (
    NameDisplayPreviewRequest,
    NameDisplayPreviewResponse,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
    VisibleProfileResponse,
)
from src.services.name_display import preview_display_name
from src.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
    description="Returns the authenticated user's full profile, including visibility settings.",
)
async def get_my_profile(user: CurrentUser) -> ProfileResponse:
    """Get the authenticated user's profile.

    Args:
        user: The authenticated user context.

    Returns:
        ProfileResponse: The user's profile data.

    Raises:
        NotFoundError: If the user has not created a profile.
    """
    service = ProfileService()
    profile = await service.get_profile(user.user_id)

    if not profile:
        raise NotFoundError("Profile not found")

    return ProfileResponse(**profile)


@router.post(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create current user's profile",
    description="Creates the authenticated user's profile. Omitted visibility toggles default to shown.",
)
async def create_my_profile(data: ProfileCreate, user: CurrentUser) -> ProfileResponse:
    """Create the authenticated user's profile.

    Raises:
        ConflictError: If the profile already exists.
    """
    service = ProfileService()
    profile = await service.create_profile(user.user_id, data)
    return ProfileResponse(**profile)


@router.put(
    "/me",
    response_model=ProfileResponse,
    summary="Update current user's profile",
    description="Updates the authenticated user's profile with provided fields.",
)
async def update_my_profile(
    data: ProfileUpdate,
    user: CurrentUser,
) -> ProfileResponse:
    """Update the authenticated user's profile.

    Args:
        data: Fields to update.
        user: The authenticated user context.

    Returns:
        ProfileResponse: The updated profile data.

    Raises:
        NotFoundError: If the profile does not exist.
    """
    service = ProfileService()
    profile = await service.update_profile(user.user_id, data)
    return ProfileResponse(**profile)


@router.post(
    "/name-display/preview",
    response_model=NameDisplayPreviewResponse,
    summary="Preview name display",
    description="Shows how a name renders under a display mode before saving it.",
)
async def preview_name_display(
    data: NameDisplayPreviewRequest,
    user: CurrentUser,
) -> NameDisplayPreviewResponse:
    """Render a name display preview."""
    return NameDisplayPreviewResponse(
        display_name=preview_display_name(data.full_name, data.display_type, data.pseudonym)
    )


@router.get(
    "/{user_id}",
    response_model=None,
    summary="Get a user's profile",
    description=(
        "Returns the part of a user's profile the caller may see, based on the "
        "caller's relationship to them and their per-contact privacy settings. "
        "Fields the caller may not see are left out. Your own id returns your full profile."
    ),
    responses={
        200: {"model": VisibleProfileResponse, "description": "Visible profile fields"},
        404: {"description": "No profile available"},
    },
)
async def get_user_profile(
    user_id: UUID,
    user: CurrentUser,
) -> dict[str, Any]:
    """Get another user's profile as visible to the caller.

    Args:
        user_id: The user whose profile is requested.
        user: The authenticated user context.

    Returns:
        dict: The visible projection, or the full profile when requesting
        your own.

    Raises:
        NotFoundError: If the user has no profile.
    """
    service = ProfileService()

    if user_id == user.user_id:
        profile = await service.get_profile(user_id)
        if not profile:
            raise NotFoundError("No profile available")
        return ProfileResponse(**profile).model_dump(mode="json")

    visible = await service.get_visible_profile(user.user_id, user_id)
    return VisibleProfileResponse(**visible).model_dump(mode="json", exclude_unset=True)
