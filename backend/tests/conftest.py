"""
Pytest fixtures for the AutoTrack API.

Provides:
- A fresh SQLite database file per test
- An authenticated AsyncClient (Firebase verification overridden)
- An unauthenticated AsyncClient for exercising the auth gate
- Sample payloads and a helper that registers a car
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import settings
from models import init_db
from services.auth import verify_firebase_token

TEST_UID = "uid1"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_path(tmp_path, monkeypatch):
    """Point the app at an empty database file and create the schema."""
    path = tmp_path / "autotrack-test.db"
    monkeypatch.setattr(settings, "SQLITE_DB_PATH", str(path))
    await init_db()
    return path


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def app():
    from main import app as fastapi_app
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app, db_path) -> AsyncGenerator[AsyncClient, None]:
    """Client whose requests are treated as signed in as TEST_UID."""
    app.dependency_overrides[verify_firebase_token] = lambda: {"sub": TEST_UID}
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def unauthenticated_client(app, db_path) -> AsyncGenerator[AsyncClient, None]:
    """Client going through the real Firebase token check."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def car_payload() -> dict:
    return {
        "car": {
            "car_name": "Civic",
            "carmodelnum": "FK8",
            "car_color": "red",
            "car_mileage": 10000,
            "car_isflooding": False,
            "car_issmoked": False,
        },
        "firebase_user_id": TEST_UID,
    }


@pytest.fixture
def create_car(async_client, car_payload):
    """Register a car through the API and return the stored row."""

    async def _create(**overrides) -> dict:
        body = {**car_payload, "car": {**car_payload["car"], **overrides}}
        response = await async_client.post("/api/cars", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def standard_inspection() -> dict:
    """Inspection payload read from a standard car certificate."""
    return {
        "is_kcar": 0,
        "chassis_number_stamp_location": "engine bay",
        "model_specification_number_category_classification_number": "12345 0001",
        "expiration_date": "2027-05-31",
        "first_registration_year_month": "2019-06",
        "model": "6BA-FK8",
        "axle_weight_ff": 820,
        "axle_weight_rr": 560,
        "noise_regulation": "98",
        "proximity_exhaust_noise_limit": 96,
        "fuel_type_code": "1",
        "car_registration_number": "品川 300 あ 12-34",
        "plate_count_size_preferred_number_identifier": "2M",
        "chassis_number": "FK8-1000001",
        "engine_model": "K20C",
        "document_type": "1",
        "version_info_1": "2",
        "version_info_2": "2",
        "registration_version_info": "1",
        "axle_weight_fr": 0,
        "axle_weight_rf": 0,
        "drive_system": "FF",
        "opacimeter_measured_car": 0,
        "nox_pm_measurement_mode": "WLTC",
        "nox_value": 0.05,
        "pm_value": 0.005,
        "safety_standard_application_date": "2017-09-01",
    }


@pytest.fixture
def kcar_inspection() -> dict:
    """Inspection payload read from a kei car certificate."""
    return {
        "is_kcar": 1,
        "chassis_number_stamp_location": "floor",
        "expiration_date": "2026-12-15",
        "first_registration_year_month": "2020-01",
        "model": "5BA-JF3",
        "axle_weight_ff": 540,
        "axle_weight_rr": 400,
        "fuel_type_code": "1",
        "car_registration_number": "練馬 580 き 56-78",
        "chassis_number": "JF3-2000002",
        "engine_model": "S07B",
        "document_type": "1",
        "system_id_2": "K",
        "system_id_3": "K",
        "version_number_2": "32",
        "version_number_3": "22",
        "k_axle_weight_fr": "-",
        "k_axle_weight_rf": "-",
        "k_drive_system": "-",
        "k_opacimeter_measured_car": "-",
        "k_nox_pm_measurement_mode": "-",
        "k_nox_value": "-",
        "k_pm_value": "-",
        "preliminary_item": "999",
    }
