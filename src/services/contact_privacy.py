"""Write-side rules for per-contact privacy overrides.

hide_fields and show_fields stay disjoint on every write: putting a field
in one list takes it out of the other.
"""

from src.schemas.contact import ContactOverride, ContactOverrideUpdate, FieldOverrideMode


def _dedupe(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


def normalize_override(update: ContactOverrideUpdate) -> ContactOverride:
    """Build a stored override from a replacement request.

    Duplicates are dropped keeping first-seen order, and a field submitted
    in both lists is kept in show_fields only.

    Args:
        update: The validated request body.

    Returns:
        ContactOverride: Override ready to store.
    """
    show_fields = _dedupe(update.show_fields)
    hide_fields = [name for name in _dedupe(update.hide_fields) if name not in show_fields]

    return ContactOverride(
        allow_personal_info=update.allow_personal_info,
        allow_professional_info=update.allow_professional_info,
        hide_fields=hide_fields,
        show_fields=show_fields,
        name_display_type=update.name_display_type.value if update.name_display_type else None,
        custom_pseudonym=update.custom_pseudonym,
        custom_note=update.custom_note,
    )


def set_field_mode(
    override: ContactOverride | None,
    field_name: str,
    mode: FieldOverrideMode,
) -> ContactOverride:
    """Return a copy of override with one field hidden, force-shown or reset.

    Args:
        override: Current override for the contact, if any.
        field_name: The profile field to change.
        mode: New mode for the field.

    Returns:
        ContactOverride: The updated override.
    """
    current = override or ContactOverride()
    hide_fields = [name for name in current.hide_fields if name != field_name]
    show_fields = [name for name in current.show_fields if name != field_name]

    if mode is FieldOverrideMode.HIDE:
        hide_fields.append(field_name)
    elif mode is FieldOverrideMode.SHOW:
        show_fields.append(field_name)

    return current.model_copy(update={"hide_fields": hide_fields, "show_fields": show_fields})
