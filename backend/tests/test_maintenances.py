"""
Maintenance endpoint tests and title derivation.
"""

import pytest
from httpx import AsyncClient

from models.maintenance import MaintType, derive_title

DATE = "2026-02-14T01:30:00.250Z"


class TestDeriveTitle:
    def test_known_type_overrides_client_title(self):
        assert derive_title("OilChange", "whatever") == "Oil Change"

    def test_known_type_without_title(self):
        assert derive_title("TireChange", None) == "Tire Change"

    def test_other_keeps_client_title(self):
        assert derive_title("Other", "Door seal") == "Door seal"

    def test_other_without_title(self):
        assert derive_title("Other", None) == "Other"

    def test_unknown_type_keeps_client_title(self):
        assert derive_title("Detailing", "Ceramic coat") == "Ceramic coat"

    def test_unknown_type_falls_back_to_type(self):
        assert derive_title("Detailing", "") == "Detailing"

    def test_every_category_has_a_title(self):
        for name, member in MaintType.__members__.items():
            assert derive_title(name, None) == member.value


class TestMaintenanceEndpoints:
    @pytest.mark.asyncio
    async def test_create_derives_title(self, async_client: AsyncClient, create_car):
        car = await create_car()
        body = {
            "car_id": car["car_id"],
            "maint_type": "OilChange",
            "maint_title": "my oil",
            "maint_date": DATE,
            "maint_description": "0W-20, 4L",
        }

        response = await async_client.post("/api/maintenances", json=body)

        assert response.status_code == 201
        data = response.json()
        assert data["maint_type"] == "OilChange"
        assert data["maint_title"] == "Oil Change"
        assert data["maint_date"] == DATE

    @pytest.mark.asyncio
    async def test_other_keeps_title(self, async_client: AsyncClient, create_car):
        car = await create_car()
        body = {
            "car_id": car["car_id"],
            "maint_type": "Other",
            "maint_title": "Cabin filter",
            "maint_date": DATE,
            "maint_description": "",
        }

        response = await async_client.post("/api/maintenances", json=body)

        assert response.status_code == 201
        assert response.json()["maint_title"] == "Cabin filter"

    @pytest.mark.asyncio
    async def test_update_rederives_title(self, async_client: AsyncClient, create_car):
        car = await create_car()
        body = {
            "car_id": car["car_id"],
            "maint_type": "Other",
            "maint_title": "Cabin filter",
            "maint_date": DATE,
            "maint_description": "",
        }
        record = (await async_client.post("/api/maintenances", json=body)).json()

        response = await async_client.put(
            f"/api/maintenances/{record['maint_id']}",
            json={**body, "maint_type": "BatteryChange"},
        )

        assert response.status_code == 200
        assert response.json()["maint_title"] == "Battery Change"

    @pytest.mark.asyncio
    async def test_unknown_car(self, async_client: AsyncClient):
        body = {
            "car_id": 999999,
            "maint_type": "CarWash",
            "maint_date": DATE,
            "maint_description": "",
        }

        response = await async_client.post("/api/maintenances", json=body)

        assert response.status_code == 400
        assert response.json()["code"] == "reference_not_found"

    @pytest.mark.asyncio
    async def test_listed_under_car(self, async_client: AsyncClient, create_car):
        car = await create_car()
        for maint_type in ("CarWash", "WiperBladeChange"):
            await async_client.post("/api/maintenances", json={
                "car_id": car["car_id"],
                "maint_type": maint_type,
                "maint_date": DATE,
                "maint_description": "",
            })

        response = await async_client.get(f"/api/cars/{car['car_id']}/maintenance")

        assert [m["maint_title"] for m in response.json()] == ["Car Wash", "Wiper Blade Change"]

    @pytest.mark.asyncio
    async def test_delete_missing(self, async_client: AsyncClient):
        response = await async_client.delete("/api/maintenances/999999")

        assert response.status_code == 404
