"""Integration tests for the User Profile API."""

import pytest
from httpx import AsyncClient


class TestUserProfileAPI:
    @pytest.mark.asyncio
    async def test_get_blank_profile(self, client: AsyncClient):
        response = await client.get("/api/v1/user-profile")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == "user-profile"
        assert data["name"] == ""
        assert data["preferences"] == {
            "notifications": True,
            "email_reminders": True,
            "sms_reminders": False,
        }

    @pytest.mark.asyncio
    async def test_patch_updates_only_sent_fields(self, client: AsyncClient):
        await client.patch("/api/v1/user-profile", json={"name": "Alex", "city": "Springfield"})

        response = await client.patch(
            "/api/v1/user-profile",
            json={"emergency_contact": {"name": "Sam", "relationship": "Sibling"}},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Alex"
        assert data["city"] == "Springfield"
        assert data["emergency_contact"] == {"name": "Sam", "phone": "", "relationship": "Sibling"}

    @pytest.mark.asyncio
    async def test_patch_is_persisted(self, client: AsyncClient):
        await client.patch("/api/v1/user-profile", json={"preferences": {"sms_reminders": True}})

        data = (await client.get("/api/v1/user-profile")).json()["data"]

        assert data["preferences"]["sms_reminders"] is True

    @pytest.mark.asyncio
    async def test_patch_can_clear_avatar(self, client: AsyncClient):
        await client.patch("/api/v1/user-profile", json={"avatar": "https://img.example/a.png"})

        response = await client.patch("/api/v1/user-profile", json={"avatar": None})

        assert response.json()["data"]["avatar"] is None

    @pytest.mark.asyncio
    async def test_patch_validation_error(self, client: AsyncClient):
        response = await client.patch("/api/v1/user-profile", json={"zip_code": "1" * 50})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
