"""Contact-relative profile visibility resolver.

Computes the part of a profile one viewer may see from the owner's field
toggles, the viewer's relationship type and the owner's per-contact
override for that viewer. Everything here is pure: callers fetch the
profile and relationship rows and pass them in.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.models.contact import ContactRelationship, RelationshipType
from src.models.profile import AgeDisclosure, UserProfile
from src.schemas.contact import ContactOverride
from src.services.name_display import display_name_for_viewer
from src.services.visibility_fields import (
    ALL_FIELDS,
    DEMOGRAPHICS_TOGGLE,
    FieldCategory,
)

PERSONAL_ACCESS_TYPES = frozenset({RelationshipType.PERSONAL.value, RelationshipType.BOTH.value})
PROFESSIONAL_ACCESS_TYPES = frozenset({RelationshipType.PROFESSIONAL.value, RelationshipType.BOTH.value})


@dataclass(frozen=True)
class FieldRule:
    """One step of the field precedence list.

    decide returns True or False to settle visibility, or None to defer to
    the next rule.
    """

    name: str
    decide: Callable[[str, ContactOverride], bool | None]


def _hidden_for_contact(field_name: str, override: ContactOverride) -> bool | None:
    # A field in both lists is treated as force-shown
    if field_name in override.hide_fields and field_name not in override.show_fields:
        return False
    return None


def _shown_for_contact(field_name: str, override: ContactOverride) -> bool | None:
    return True if field_name in override.show_fields else None


# Evaluated in order; the category default applies when no rule decides
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("hide", _hidden_for_contact),
    FieldRule("force_show", _shown_for_contact),
)

# Viewers without a relationship can be hidden from but never force-shown to
STRANGER_FIELD_RULES: tuple[FieldRule, ...] = (FieldRule("hide", _hidden_for_contact),)


@dataclass(frozen=True)
class CategoryAccess:
    """Which gated categories a viewer may see."""

    personal: bool = False
    professional: bool = False

    def allows(self, category: FieldCategory) -> bool:
        """Check access for a category; general info is never gated."""
        if category is FieldCategory.PERSONAL:
            return self.personal
        if category is FieldCategory.PROFESSIONAL:
            return self.professional
        return True


def resolve_category_access(
    relationship: ContactRelationship | None,
    override: ContactOverride | None,
) -> CategoryAccess:
    """Work out category access from the relationship type and override.

    An override can only deny a category (allow_* set to False); granting
    always needs a personal, professional or both relationship. No
    relationship and unrecognised relationship types grant nothing.

    Args:
        relationship: Viewer to target relationship row, if one exists.
        override: The target's override for the viewer, if any.

    Returns:
        CategoryAccess: Personal and professional access flags.
    """
    if relationship is None:
        return CategoryAccess()

    relationship_type = relationship.get("relationship_type")
    personal_denied = override is not None and override.allow_personal_info is False
    professional_denied = override is not None and override.allow_professional_info is False

    return CategoryAccess(
        personal=not personal_denied and relationship_type in PERSONAL_ACCESS_TYPES,
        professional=not professional_denied and relationship_type in PROFESSIONAL_ACCESS_TYPES,
    )


def is_field_visible(
    field_name: str,
    category_allowed: bool,
    default_show: bool,
    override: ContactOverride | None,
    rules: tuple[FieldRule, ...] = FIELD_RULES,
) -> bool:
    """Decide one field: override rules in order, then category and toggle.

    Args:
        field_name: Profile field being decided.
        category_allowed: Whether the viewer has access to the field's category.
        default_show: The owner's toggle for the field.
        override: The owner's override for this viewer, if any.
        rules: Override rules to apply, hide before force-show by default.

    Returns:
        bool: Whether the field is shown.
    """
    if override is not None:
        for rule in rules:
            decision = rule.decide(field_name, override)
            if decision is not None:
                return decision
    return category_allowed and default_show


def age_info(profile: UserProfile) -> dict[str, Any]:
    """Age fields to disclose, according to the owner's age_disclosure mode."""
    disclosure = profile.get("age_disclosure")

    if disclosure == AgeDisclosure.SPECIFIC.value and profile.get("age") is not None:
        return {"age": profile["age"], "age_disclosure": AgeDisclosure.SPECIFIC.value}
    if disclosure == AgeDisclosure.ADULT_MINOR.value and profile.get("age_category"):
        return {"age_category": profile["age_category"], "age_disclosure": AgeDisclosure.ADULT_MINOR.value}
    return {"age_disclosure": AgeDisclosure.PRIVATE.value}


def _toggle(profile: UserProfile, column: str) -> bool:
    # Toggles default to on in the database
    value = profile.get(column)
    return True if value is None else bool(value)


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    return True


def resolve_visible_profile(
    viewer_id: UUID,
    target_profile: UserProfile,
    relationship: ContactRelationship | None,
    contact_overrides: Mapping[UUID, ContactOverride],
) -> dict[str, Any]:
    """Project a profile down to what one viewer may see.

    Without a relationship only general fields are considered: the hide
    list still applies but show_fields does not. With one, each field goes
    through FIELD_RULES and then falls back to category access and toggle.
    Picture lists carry their stored primary index with them. Age is
    decided once from category access and the demographics toggle.

    Args:
        viewer_id: The requesting user.
        target_profile: Full profile row of the user being viewed.
        relationship: Viewer to target relationship row, if any.
        contact_overrides: The target's parsed per-contact overrides.

    Returns:
        dict: user_id, display_name and the visible fields only.
    """
    override = contact_overrides.get(viewer_id)
    access = resolve_category_access(relationship, override)
    rules = FIELD_RULES if relationship is not None else STRANGER_FIELD_RULES

    visible: dict[str, Any] = {
        "user_id": target_profile.get("user_id"),
        "display_name": display_name_for_viewer(target_profile, override),
    }

    for field in ALL_FIELDS:
        if relationship is None and field.category is not FieldCategory.GENERAL:
            continue
        shown = is_field_visible(
            field.name,
            access.allows(field.category),
            _toggle(target_profile, field.toggle),
            override,
            rules,
        )
        value = target_profile.get(field.name)
        if not shown or not _has_value(value):
            continue
        visible[field.name] = value
        if field.companion:
            visible[field.companion] = target_profile.get(field.companion)

    if access.personal and _toggle(target_profile, DEMOGRAPHICS_TOGGLE):
        visible.update(age_info(target_profile))

    return visible
