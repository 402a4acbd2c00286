"""Integration tests for the Vet Profiles API."""

import pytest
from httpx import AsyncClient

BASE = "/api/v1/vet-profiles"

VALLEY_VET = {
    "is_clinic": True,
    "clinic_name": "Valley Vet",
    "address": "123 Main St",
    "phone": "555-111-2222",
}


async def _create(client: AsyncClient, body: dict) -> dict:
    response = await client.post(BASE, json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestVetProfilesCRUD:
    """Integration tests for profile create/read/update/delete."""

    @pytest.mark.asyncio
    async def test_create_clinic(self, client: AsyncClient):
        response = await client.post(BASE, json=VALLEY_VET)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["clinic_name"] == "Valley Vet"
        assert data["is_clinic"] is True
        assert "id" in data
        assert "created_at" in data

    @pytest.mark.asyncio
    async def test_create_duplicate_clinic_returns_409(self, client: AsyncClient):
        await _create(client, VALLEY_VET)

        response = await client.post(
            BASE,
            json={
                "is_clinic": True,
                "clinic_name": "valley vet",
                "address": "123 main st",
                "phone": "(555) 111-2222",
            },
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_PROFILE"

    @pytest.mark.asyncio
    async def test_create_vet_with_unknown_clinic_returns_400(self, client: AsyncClient):
        response = await client.post(BASE, json={"name": "Jane Doe", "clinic_id": "nope"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_CLINIC_REFERENCE"

    @pytest.mark.asyncio
    async def test_list_profiles(self, client: AsyncClient):
        await _create(client, VALLEY_VET)
        await _create(client, {"name": "Jane Doe"})

        response = await client.get(BASE)

        assert response.status_code == 200
        assert len(response.json()["data"]) == 2

    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient):
        created = await _create(client, VALLEY_VET)

        response = await client.get(f"{BASE}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    @pytest.mark.asyncio
    async def test_get_missing_profile_returns_404(self, client: AsyncClient):
        response = await client.get(f"{BASE}/missing")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_profile(self, client: AsyncClient):
        created = await _create(client, VALLEY_VET)

        response = await client.patch(f"{BASE}/{created['id']}", json={"hours": "9-5"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["hours"] == "9-5"
        assert data["clinic_name"] == "Valley Vet"

    @pytest.mark.asyncio
    async def test_resave_without_changes_is_allowed(self, client: AsyncClient):
        created = await _create(client, VALLEY_VET)

        response = await client.patch(f"{BASE}/{created['id']}", json=VALLEY_VET)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_update_into_duplicate_returns_409(self, client: AsyncClient):
        await _create(client, VALLEY_VET)
        other = await _create(client, {**VALLEY_VET, "clinic_name": "Hilltop"})

        response = await client.patch(f"{BASE}/{other['id']}", json={"clinic_name": "Valley Vet"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_missing_profile_returns_404(self, client: AsyncClient):
        response = await client.patch(f"{BASE}/missing", json={"notes": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_null_is_clinic_is_ignored(self, client: AsyncClient):
        created = await _create(client, VALLEY_VET)

        response = await client.patch(f"{BASE}/{created['id']}", json={"is_clinic": None})

        assert response.status_code == 200
        assert response.json()["data"]["is_clinic"] is True

    @pytest.mark.asyncio
    async def test_delete_profile(self, client: AsyncClient):
        created = await _create(client, {"name": "Jane Doe"})

        response = await client.delete(f"{BASE}/{created['id']}")

        assert response.status_code == 204
        assert (await client.get(f"{BASE}/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_profile_returns_404(self, client: AsyncClient):
        response = await client.delete(f"{BASE}/missing")

        assert response.status_code == 404


class TestClinicEndpoints:
    """Integration tests for clinic lookups and clinic deletion."""

    @pytest.mark.asyncio
    async def test_clinic_and_its_vets(self, client: AsyncClient):
        clinic = await _create(client, VALLEY_VET)
        vet = await _create(client, {"name": "Jane Doe", "clinic_id": clinic["id"]})
        await _create(client, {"name": "Unlinked"})

        clinics = (await client.get(f"{BASE}/clinics")).json()["data"]
        assert [c["id"] for c in clinics] == [clinic["id"]]

        got = await client.get(f"{BASE}/clinics/{clinic['id']}")
        assert got.status_code == 200

        vets = (await client.get(f"{BASE}/clinics/{clinic['id']}/vets")).json()["data"]
        assert [v["id"] for v in vets] == [vet["id"]]

    @pytest.mark.asyncio
    async def test_get_clinic_rejects_practitioner_id(self, client: AsyncClient):
        vet = await _create(client, {"name": "Jane Doe"})

        response = await client.get(f"{BASE}/clinics/{vet['id']}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "CLINIC_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_deleting_clinic_unlinks_vets(self, client: AsyncClient):
        clinic = await _create(client, VALLEY_VET)
        a = await _create(client, {"name": "Jane Doe", "clinic_id": clinic["id"]})
        b = await _create(client, {"name": "John Roe", "clinic_id": clinic["id"]})

        await client.delete(f"{BASE}/{clinic['id']}")

        for vet in (a, b):
            data = (await client.get(f"{BASE}/{vet['id']}")).json()["data"]
            assert data["clinic_id"] is None


class TestDuplicateTools:
    """Integration tests for duplicate checks, groups and cleanup."""

    @pytest.mark.asyncio
    async def test_duplicate_check_reports_exact_and_similar(self, client: AsyncClient):
        stored = await _create(
            client, {"name": "Jane Doe", "clinic_name": "Valley Vet", "specialty": "Surgery"}
        )

        response = await client.post(
            f"{BASE}/duplicate-check",
            json={"name": "J. Doe", "clinic_name": "Valley Vet", "specialty": "Surgery"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_duplicate"] is False
        assert len(data["similar"]) == 1
        assert data["similar"][0]["profile"]["id"] == stored["id"]
        assert data["similar"][0]["reasons"] == ["Same clinic and specialty"]

    @pytest.mark.asyncio
    async def test_duplicate_check_excludes_profile_being_edited(self, client: AsyncClient):
        stored = await _create(client, VALLEY_VET)

        response = await client.post(
            f"{BASE}/duplicate-check",
            params={"exclude_id": stored["id"]},
            json=VALLEY_VET,
        )

        data = response.json()["data"]
        assert data["is_duplicate"] is False
        assert data["similar"] == []

    @pytest.mark.asyncio
    async def test_no_duplicate_groups_in_clean_store(self, client: AsyncClient):
        await _create(client, VALLEY_VET)

        groups = (await client.get(f"{BASE}/duplicates")).json()["data"]
        cleanup = await client.post(f"{BASE}/duplicates/cleanup")

        assert groups == []
        assert cleanup.status_code == 200
        assert cleanup.json() == {"removed_count": 0}
