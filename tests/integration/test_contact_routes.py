"""Integration tests for contact and contact privacy API endpoints."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

USER_ID = "550e8400-e29b-41d4-a716-446655440000"
CONTACT_ID = "660e8400-e29b-41d4-a716-446655440000"

RELATIONSHIP = {
    "id": 3,
    "user_id": USER_ID,
    "contact_id": CONTACT_ID,
    "relationship_type": "professional",
    "profile_visibility": "basic",
    "custom_visibility_settings": None,
    "added_at": "2024-01-01T00:00:00Z",
    "updated_at": "2024-01-01T00:00:00Z",
}


def response(data: Any) -> MagicMock:
    """Build a Supabase response mock."""
    mock_response = MagicMock()
    mock_response.data = data
    return mock_response


@pytest.fixture
def tables(mock_supabase_client: MagicMock) -> dict[str, MagicMock]:
    """Route table() calls on the shared client to per-table mocks."""
    table_mocks = {"user_profiles": MagicMock(), "contact_relationships": MagicMock()}
    mock_supabase_client.table.side_effect = lambda name: table_mocks[name]
    return table_mocks


def set_relationship(tables: dict[str, MagicMock], relationship: dict[str, Any] | None) -> None:
    chain = tables["contact_relationships"].select.return_value.eq.return_value.eq.return_value
    chain.limit.return_value.execute.return_value = response([relationship] if relationship else [])


def set_privacy(tables: dict[str, MagicMock], settings: dict[str, Any] | None) -> MagicMock:
    profiles = tables["user_profiles"]
    rows = [] if settings is None else [{"user_id": USER_ID, "contact_privacy_settings": settings}]
    profiles.select.return_value.eq.return_value.limit.return_value.execute.return_value = response(rows)
    profiles.update.return_value.eq.return_value.execute.return_value = response([{"user_id": USER_ID}])
    return profiles.update


class TestContacts:
    """Tests for /api/v1/contacts endpoints."""

    def test_list_contacts(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that the user's contacts are listed."""
        chain = tables["contact_relationships"].select.return_value.eq.return_value
        chain.order.return_value.execute.return_value = response([RELATIONSHIP])

        response_ = client.get("/api/v1/contacts", headers=auth_headers)

        assert response_.status_code == 200
        assert response_.json()[0]["contact_id"] == CONTACT_ID

    def test_add_contact(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that a contact is added with 201."""
        set_relationship(tables, None)
        tables["contact_relationships"].insert.return_value.execute.return_value = response([RELATIONSHIP])

        response_ = client.post(
            "/api/v1/contacts",
            json={"contact_id": CONTACT_ID, "relationship_type": "professional"},
            headers=auth_headers,
        )

        assert response_.status_code == 201
        assert response_.json()["relationship_type"] == "professional"

    def test_add_self(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that adding yourself returns 400."""
        response_ = client.post(
            "/api/v1/contacts",
            json={"contact_id": USER_ID, "relationship_type": "both"},
            headers=auth_headers,
        )

        assert response_.status_code == 400
        assert response_.json()["error"] == "validation_error"

    def test_add_duplicate(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that adding an existing contact returns 409."""
        set_relationship(tables, RELATIONSHIP)

        response_ = client.post(
            "/api/v1/contacts",
            json={"contact_id": CONTACT_ID, "relationship_type": "both"},
            headers=auth_headers,
        )

        assert response_.status_code == 409

    def test_add_unknown_relationship_type(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that relationship types are validated."""
        response_ = client.post(
            "/api/v1/contacts",
            json={"contact_id": CONTACT_ID, "relationship_type": "family"},
            headers=auth_headers,
        )

        assert response_.status_code == 422

    def test_get_missing_contact(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that an unknown contact returns 404."""
        set_relationship(tables, None)

        response_ = client.get(f"/api/v1/contacts/{CONTACT_ID}", headers=auth_headers)

        assert response_.status_code == 404

    def test_update_contact(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that the relationship type is changed."""
        update_chain = tables["contact_relationships"].update.return_value.eq.return_value.eq.return_value
        update_chain.execute.return_value = response([{**RELATIONSHIP, "relationship_type": "both"}])

        response_ = client.put(
            f"/api/v1/contacts/{CONTACT_ID}",
            json={"relationship_type": "both"},
            headers=auth_headers,
        )

        assert response_.status_code == 200
        assert response_.json()["relationship_type"] == "both"

    def test_remove_contact(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that a contact is removed."""
        delete_chain = tables["contact_relationships"].delete.return_value.eq.return_value.eq.return_value
        delete_chain.execute.return_value = response([RELATIONSHIP])

        response_ = client.delete(f"/api/v1/contacts/{CONTACT_ID}", headers=auth_headers)

        assert response_.status_code == 200
        assert response_.json() == {"message": "Contact removed"}


class TestContactPrivacy:
    """Tests for /api/v1/contacts/{contact_id}/privacy endpoints."""

    def test_get_empty_privacy(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that a contact without settings gets an empty record."""
        set_privacy(tables, {})

        data = client.get(f"/api/v1/contacts/{CONTACT_ID}/privacy", headers=auth_headers).json()

        assert data["contact_id"] == CONTACT_ID
        assert data["hide_fields"] == []
        assert data["show_fields"] == []

    def test_put_privacy_normalizes(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that a field in both lists is stored as shown."""
        update_mock = set_privacy(tables, {})

        response_ = client.put(
            f"/api/v1/contacts/{CONTACT_ID}/privacy",
            json={
                "allow_personal_info": False,
                "hide_fields": ["skills", "job_title"],
                "show_fields": ["skills"],
                "name_display_type": "first_initial_last",
            },
            headers=auth_headers,
        )

        assert response_.status_code == 200
        data = response_.json()
        assert data["hide_fields"] == ["job_title"]
        assert data["show_fields"] == ["skills"]
        stored = update_mock.call_args[0][0]["contact_privacy_settings"][CONTACT_ID]
        assert stored["allow_personal_info"] is False
        assert stored["name_display_type"] == "first_initial_last"

    def test_put_rejects_unknown_field(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that unknown field names return 422."""
        response_ = client.put(
            f"/api/v1/contacts/{CONTACT_ID}/privacy",
            json={"hide_fields": ["email"]},
            headers=auth_headers,
        )

        assert response_.status_code == 422

    def test_put_without_profile(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that settings cannot be stored without a profile."""
        set_privacy(tables, None)

        response_ = client.put(f"/api/v1/contacts/{CONTACT_ID}/privacy", json={}, headers=auth_headers)

        assert response_.status_code == 404

    def test_patch_field_mode(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that one field is hidden for a contact."""
        set_privacy(tables, {CONTACT_ID: {"show_fields": ["education"]}})

        response_ = client.patch(
            f"/api/v1/contacts/{CONTACT_ID}/privacy/fields/education",
            json={"mode": "hide"},
            headers=auth_headers,
        )

        assert response_.status_code == 200
        assert response_.json()["hide_fields"] == ["education"]
        assert response_.json()["show_fields"] == []

    def test_patch_unknown_field(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """Test that unknown fields are rejected."""
        response_ = client.patch(
            f"/api/v1/contacts/{CONTACT_ID}/privacy/fields/password",
            json={"mode": "show"},
            headers=auth_headers,
        )

        assert response_.status_code == 422

    def test_delete_privacy(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that settings are cleared."""
        update_mock = set_privacy(tables, {CONTACT_ID: {"hide_fields": ["skills"]}})

        response_ = client.delete(f"/api/v1/contacts/{CONTACT_ID}/privacy", headers=auth_headers)

        assert response_.status_code == 200
        assert update_mock.call_args[0][0]["contact_privacy_settings"] == {}

    def test_delete_missing_privacy(
        self, client: TestClient, tables: dict[str, MagicMock], auth_headers: dict[str, str]
    ) -> None:
        """Test that clearing absent settings returns 404."""
        set_privacy(tables, {})

        response_ = client.delete(f"/api/v1/contacts/{CONTACT_ID}/privacy", headers=auth_headers)

        assert response_.status_code == 404
