"""Display-name substitution for contact-facing profile views."""

from src.models.profile import NameDisplayType, UserProfile
from src.schemas.contact import ContactOverride

FALLBACK_FULL_NAME = "User"
PREVIEW_NAME_PLACEHOLDER = "Preview Name"
PREVIEW_PSEUDONYM_PLACEHOLDER = "Custom Name"


def resolve_display_name(
    full_name: str,
    display_type: str | None,
    pseudonym: str | None = None,
) -> str:
    """Transform a full name according to a name display mode.

    Initial-based modes need at least two name parts and return the name
    unchanged otherwise. Unknown or unset modes behave like full.

    Args:
        full_name: The user's canonical full name.
        display_type: A NameDisplayType value.
        pseudonym: Name used in pseudonym mode.

    Returns:
        str: The name to show.
    """
    if display_type == NameDisplayType.PSEUDONYM.value:
        return pseudonym or full_name

    if display_type not in (
        NameDisplayType.FIRST_INITIAL_LAST.value,
        NameDisplayType.FIRST_LAST_INITIAL.value,
    ):
        return full_name

    parts = full_name.split()
    if len(parts) < 2:
        return full_name

    first, last = parts[0], parts[-1]
    if display_type == NameDisplayType.FIRST_INITIAL_LAST.value:
        return f"{first[0]}. {last}"
    return f"{first} {last[0]}."


def canonical_full_name(profile: UserProfile) -> str:
    """Name the transforms start from: full name, else username, else a placeholder."""
    return profile.get("full_name") or profile.get("username") or FALLBACK_FULL_NAME


def display_name_for_viewer(
    profile: UserProfile,
    override: ContactOverride | None,
    fallback_pseudonym: str | None = None,
) -> str:
    """Resolve the name a specific viewer sees for a profile.

    The display mode comes from the viewer's override, then the profile
    default, then full. The pseudonym comes from the viewer's override, then
    the profile default, then fallback_pseudonym, then the full name.

    Args:
        profile: The target user's profile row.
        override: The target's override for this viewer, if any.
        fallback_pseudonym: Caller-supplied pseudonym of last resort.

    Returns:
        str: The display name for this viewer.
    """
    display_type = (
        (override.name_display_type if override else None)
        or profile.get("default_name_display")
        or NameDisplayType.FULL.value
    )
    pseudonym = (
        (override.custom_pseudonym if override else None)
        or profile.get("default_pseudonym")
        or fallback_pseudonym
    )
    return resolve_display_name(canonical_full_name(profile), display_type, pseudonym)


def preview_display_name(full_name: str, display_type: str | None, pseudonym: str | None = None) -> str:
    """Render a display-name preview while a user edits their settings."""
    if not full_name:
        return PREVIEW_NAME_PLACEHOLDER
    if display_type == NameDisplayType.PSEUDONYM.value:
        return pseudonym or PREVIEW_PSEUDONYM_PLACEHOLDER
    return resolve_display_name(full_name, display_type, pseudonym)
