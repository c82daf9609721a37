"""Database model type definitions."""

from src.models.contact import (
    ContactInvitation,
    ContactRelationship,
    ProfileVisibility,
    RelationshipType,
)
from src.models.profile import AgeDisclosure, NameDisplayType, UserProfile

__all__ = [
    "UserProfile",
    "NameDisplayType",
    "AgeDisclosure",
    "ContactRelationship",
    "ContactInvitation",
    "RelationshipType",
    "ProfileVisibility",
]
