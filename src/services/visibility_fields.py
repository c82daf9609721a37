"""Profile field catalogue for contact-relative visibility.

Every profile field a contact may be shown belongs to exactly one category
and is switched on or off by one owner toggle. Several fields can share a
toggle (job_title and company both follow show_job_info).
"""

from dataclasses import dataclass
from enum import Enum


class FieldCategory(str, Enum):
    """Information categories a profile is partitioned into."""

    GENERAL = "general"
    PERSONAL = "personal"
    PROFESSIONAL = "professional"


@dataclass(frozen=True)
class VisibilityField:
    """A profile field and the owner toggle that controls it.

    Attributes:
        name: Profile column emitted when the field is visible.
        category: Category whose access gates the field.
        toggle: Profile column holding the owner's show/hide switch.
        companion: Column emitted alongside the field and never on its own.
    """

    name: str
    category: FieldCategory
    toggle: str
    companion: str | None = None


GENERAL_FIELDS: tuple[VisibilityField, ...] = (
    VisibilityField("education", FieldCategory.GENERAL, "show_education"),
    VisibilityField("skills", FieldCategory.GENERAL, "show_skills"),
    VisibilityField("languages", FieldCategory.GENERAL, "show_languages"),
    VisibilityField("general_location", FieldCategory.GENERAL, "show_location"),
    VisibilityField("certifications", FieldCategory.GENERAL, "show_certifications"),
    VisibilityField("achievements", FieldCategory.GENERAL, "show_achievements"),
)

PERSONAL_FIELDS: tuple[VisibilityField, ...] = (
    VisibilityField("personal_interests", FieldCategory.PERSONAL, "show_personal_interests"),
    VisibilityField("personal_bio", FieldCategory.PERSONAL, "show_personal_bio"),
    VisibilityField("personal_website", FieldCategory.PERSONAL, "show_personal_website"),
    VisibilityField("marital_status", FieldCategory.PERSONAL, "show_relationship_status"),
    VisibilityField(
        "personal_pictures",
        FieldCategory.PERSONAL,
        "show_personal_pictures",
        companion="primary_personal_pic",
    ),
    VisibilityField("gender", FieldCategory.PERSONAL, "show_demographics"),
)

PROFESSIONAL_FIELDS: tuple[VisibilityField, ...] = (
    VisibilityField("job_title", FieldCategory.PROFESSIONAL, "show_job_info"),
    VisibilityField("company", FieldCategory.PROFESSIONAL, "show_job_info"),
    VisibilityField("professional_bio", FieldCategory.PROFESSIONAL, "show_professional_bio"),
    VisibilityField("work_experience", FieldCategory.PROFESSIONAL, "show_work_experience"),
    VisibilityField("professional_website", FieldCategory.PROFESSIONAL, "show_professional_websites"),
    VisibilityField("linkedin_profile", FieldCategory.PROFESSIONAL, "show_professional_websites"),
    VisibilityField(
        "professional_pictures",
        FieldCategory.PROFESSIONAL,
        "show_professional_pictures",
        companion="primary_professional_pic",
    ),
    VisibilityField("work_history", FieldCategory.PROFESSIONAL, "show_work_history"),
)

ALL_FIELDS: tuple[VisibilityField, ...] = GENERAL_FIELDS + PERSONAL_FIELDS + PROFESSIONAL_FIELDS

FIELD_BY_NAME: dict[str, VisibilityField] = {field.name: field for field in ALL_FIELDS}

# Names accepted in a contact override's hide/show lists
OVERRIDABLE_FIELD_NAMES: frozenset[str] = frozenset(FIELD_BY_NAME)

# Toggle gating the age sub-rule
DEMOGRAPHICS_TOGGLE = "show_demographics"
