"""Unit tests for ProfileService."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID

import pytest

from src.api.middleware.error_handler import ConflictError, NotFoundError
from src.schemas.contact import ContactOverrideUpdate, FieldOverrideMode
from src.schemas.profile import ProfileCreate, ProfileUpdate
from src.services.profile_service import ProfileService

OWNER_ID = UUID("660e8400-e29b-41d4-a716-446655440000")
VIEWER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")


def response(data: Any) -> MagicMock:
    """Build a Supabase response mock."""
    mock_response = MagicMock()
    mock_response.data = data
    return mock_response


@pytest.fixture
def mock_supabase() -> MagicMock:
    """Create a mock Supabase client."""
    return MagicMock()


@pytest.fixture
def profile_service(mock_supabase: MagicMock) -> ProfileService:
    """Create ProfileService with mocked client."""
    with patch("src.services.profile_service.get_supabase_client", return_value=mock_supabase):
        return ProfileService()


def set_profile(mock_supabase: MagicMock, profile: dict[str, Any] | None) -> None:
    mock_supabase.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = (
        response([profile] if profile else [])
    )


def set_update_result(mock_supabase: MagicMock, profile: dict[str, Any] | None) -> MagicMock:
    update_mock = mock_supabase.table.return_value.update
    update_mock.return_value.eq.return_value.execute.return_value = response([profile] if profile else [])
    return update_mock


class TestGetProfile:
    """Tests for get_profile method."""

    @pytest.mark.asyncio
    async def test_returns_profile(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that an existing profile is returned."""
        profile = {"user_id": str(OWNER_ID), "full_name": "John Smith"}
        set_profile(mock_supabase, profile)

        result = await profile_service.get_profile(OWNER_ID)

        assert result == profile
        mock_supabase.table.assert_called_with("user_profiles")

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, profile_service: ProfileService, mock_supabase: MagicMock
    ) -> None:
        """Test that None is returned when no profile exists."""
        set_profile(mock_supabase, None)

        assert await profile_service.get_profile(OWNER_ID) is None


class TestCreateProfile:
    """Tests for create_profile method."""

    @pytest.mark.asyncio
    async def test_inserts_profile(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that only provided fields are inserted."""
        set_profile(mock_supabase, None)
        created = {"user_id": str(OWNER_ID), "full_name": "John Smith"}
        insert_mock = mock_supabase.table.return_value.insert
        insert_mock.return_value.execute.return_value = response([created])

        result = await profile_service.create_profile(
            OWNER_ID,
            ProfileCreate(full_name="John Smith", show_skills=False, default_name_display="first_initial_last"),
        )

        assert result == created
        insert_mock.assert_called_once_with(
            {
                "full_name": "John Smith",
                "show_skills": False,
                "default_name_display": "first_initial_last",
                "user_id": str(OWNER_ID),
                "contact_privacy_settings": {},
            }
        )

    @pytest.mark.asyncio
    async def test_conflict_when_exists(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that a second profile cannot be created."""
        set_profile(mock_supabase, {"user_id": str(OWNER_ID)})

        with pytest.raises(ConflictError):
            await profile_service.create_profile(OWNER_ID, ProfileCreate(full_name="John Smith"))


class TestUpdateProfile:
    """Tests for update_profile method."""

    @pytest.mark.asyncio
    async def test_updates_only_set_fields(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that unset fields are left alone and updated_at is stamped."""
        updated = {"user_id": str(OWNER_ID), "skills": "Go"}
        update_mock = set_update_result(mock_supabase, updated)

        result = await profile_service.update_profile(OWNER_ID, ProfileUpdate(skills="Go", show_location=None))

        assert result == updated
        update_data = update_mock.call_args[0][0]
        assert update_data["skills"] == "Go"
        assert update_data["show_location"] is None
        assert "updated_at" in update_data
        assert "full_name" not in update_data

    @pytest.mark.asyncio
    async def test_not_found(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that updating a missing profile raises NotFoundError."""
        set_update_result(mock_supabase, None)

        with pytest.raises(NotFoundError):
            await profile_service.update_profile(OWNER_ID, ProfileUpdate(skills="Go"))

    @pytest.mark.asyncio
    async def test_empty_update_returns_profile(
        self, profile_service: ProfileService, mock_supabase: MagicMock
    ) -> None:
        """Test that an empty update reads instead of writing."""
        profile = {"user_id": str(OWNER_ID)}
        set_profile(mock_supabase, profile)

        result = await profile_service.update_profile(OWNER_ID, ProfileUpdate())

        assert result == profile
        mock_supabase.table.return_value.update.assert_not_called()


class TestGetVisibleProfile:
    """Tests for get_visible_profile method."""

    @pytest.mark.asyncio
    async def test_resolves_with_relationship_and_override(
        self, profile_service: ProfileService, mock_supabase: MagicMock
    ) -> None:
        """Test that the viewer's relationship and override are applied."""
        set_profile(
            mock_supabase,
            {
                "user_id": str(OWNER_ID),
                "full_name": "John Smith",
                "education": "Major University",
                "personal_bio": "Dog person",
                "personal_interests": "Hiking",
                "contact_privacy_settings": {str(VIEWER_ID): {"hide_fields": ["personal_bio"]}},
            },
        )

        with patch("src.services.profile_service.ContactService") as mock_contacts:
            mock_contacts.return_value.get_relationship = AsyncMock(
                return_value={"relationship_type": "personal"}
            )
            result = await profile_service.get_visible_profile(VIEWER_ID, OWNER_ID)

        mock_contacts.return_value.get_relationship.assert_awaited_once_with(VIEWER_ID, OWNER_ID)
        assert result["display_name"] == "John Smith"
        assert result["education"] == "Major University"
        assert result["personal_interests"] == "Hiking"
        assert "personal_bio" not in result

    @pytest.mark.asyncio
    async def test_no_profile_available(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that a missing target profile raises NotFoundError."""
        set_profile(mock_supabase, None)

        with pytest.raises(NotFoundError) as exc_info:
            await profile_service.get_visible_profile(VIEWER_ID, OWNER_ID)

        assert exc_info.value.message == "No profile available"


class TestContactOverrides:
    """Tests for per-contact override management."""

    @pytest.mark.asyncio
    async def test_set_contact_override_normalizes_and_stores(
        self, profile_service: ProfileService, mock_supabase: MagicMock
    ) -> None:
        """Test that overrides are normalized and stored under the contact id."""
        other = "770e8400-e29b-41d4-a716-446655440000"
        set_profile(
            mock_supabase,
            {"user_id": str(OWNER_ID), "contact_privacy_settings": {other: {"hide_fields": ["skills"]}}},
        )
        update_mock = set_update_result(mock_supabase, {"user_id": str(OWNER_ID)})

        override = await profile_service.set_contact_override(
            OWNER_ID,
            VIEWER_ID,
            ContactOverrideUpdate(hide_fields=["skills", "education"], show_fields=["skills"]),
        )

        assert override.hide_fields == ["education"]
        assert override.show_fields == ["skills"]
        stored = update_mock.call_args[0][0]["contact_privacy_settings"]
        assert stored[str(VIEWER_ID)] == {"hide_fields": ["education"], "show_fields": ["skills"]}
        assert stored[other] == {"hide_fields": ["skills"]}

    @pytest.mark.asyncio
    async def test_set_contact_field_mode(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that one field is moved between lists."""
        set_profile(
            mock_supabase,
            {
                "user_id": str(OWNER_ID),
                "contact_privacy_settings": {str(VIEWER_ID): {"hide_fields": ["skills"], "custom_note": "n"}},
            },
        )
        update_mock = set_update_result(mock_supabase, {"user_id": str(OWNER_ID)})

        override = await profile_service.set_contact_field_mode(
            OWNER_ID, VIEWER_ID, "skills", FieldOverrideMode.SHOW
        )

        assert override.show_fields == ["skills"]
        assert override.hide_fields == []
        stored = update_mock.call_args[0][0]["contact_privacy_settings"][str(VIEWER_ID)]
        assert stored["custom_note"] == "n"

    @pytest.mark.asyncio
    async def test_get_contact_override(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that the stored override is parsed."""
        set_profile(
            mock_supabase,
            {"user_id": str(OWNER_ID), "contact_privacy_settings": {str(VIEWER_ID): {"show_fields": ["gender"]}}},
        )

        override = await profile_service.get_contact_override(OWNER_ID, VIEWER_ID)

        assert override is not None
        assert override.show_fields == ["gender"]

    @pytest.mark.asyncio
    async def test_clear_contact_override(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that clearing removes only that contact's entry."""
        set_profile(
            mock_supabase,
            {"user_id": str(OWNER_ID), "contact_privacy_settings": {str(VIEWER_ID): {}, "other": {}}},
        )
        update_mock = set_update_result(mock_supabase, {"user_id": str(OWNER_ID)})

        await profile_service.clear_contact_override(OWNER_ID, VIEWER_ID)

        assert update_mock.call_args[0][0]["contact_privacy_settings"] == {"other": {}}

    @pytest.mark.asyncio
    async def test_clear_missing_override(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that clearing an absent override raises NotFoundError."""
        set_profile(mock_supabase, {"user_id": str(OWNER_ID), "contact_privacy_settings": {}})

        with pytest.raises(NotFoundError):
            await profile_service.clear_contact_override(OWNER_ID, VIEWER_ID)

    @pytest.mark.asyncio
    async def test_override_requires_profile(self, profile_service: ProfileService, mock_supabase: MagicMock) -> None:
        """Test that overrides cannot be set without a profile."""
        set_profile(mock_supabase, None)

        with pytest.raises(NotFoundError):
            await profile_service.set_contact_override(OWNER_ID, VIEWER_ID, ContactOverrideUpdate())
