"""
Error envelope tests: identifier parsing, integer bounds, date-time format
and the catch-all 500 handler.
"""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from config import Settings, get_settings
from errors import SQLITE_INT_MAX, InvalidIdentifier, parse_int_id
from models.common import IsoDateTime
from services.auth import verify_firebase_token

HUGE_ID = "99999999999999999999"


class TestParseIntId:
    def test_plain_digits(self):
        assert parse_int_id("42", "car_id") == 42

    def test_largest_sqlite_integer(self):
        assert parse_int_id(str(SQLITE_INT_MAX), "car_id") == SQLITE_INT_MAX

    @pytest.mark.parametrize("value", [
        "1_000", " 5", "5 ", "-1", "+5", "abc", "", "²", str(SQLITE_INT_MAX + 1), HUGE_ID,
    ])
    def test_rejected(self, value):
        with pytest.raises(InvalidIdentifier):
            parse_int_id(value, "car_id")


class TestIsoDateTime:
    adapter = TypeAdapter(IsoDateTime)

    @pytest.mark.parametrize("value", ["2026-01-31T09:00:00Z", "2026-01-31T09:00:00.123Z"])
    def test_utc_accepted_verbatim(self, value):
        assert self.adapter.validate_python(value) == value

    @pytest.mark.parametrize("value", [
        "2026-01-31",
        "2026-01-31T09:00:00",
        "2026-01-31T09:00:00+09:00",
        "2026-13-31T09:00:00Z",
        "yesterdayTZ",
    ])
    def test_rejected(self, value):
        with pytest.raises(PydanticValidationError):
            self.adapter.validate_python(value)


class TestOversizedIdentifiers:
    @pytest.mark.asyncio
    async def test_get_car_with_huge_id(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/cars/{HUGE_ID}")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_identifier"

    @pytest.mark.asyncio
    async def test_delete_accident_with_huge_id(self, async_client: AsyncClient):
        response = await async_client.delete(f"/api/accidents/{HUGE_ID}")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_identifier"

    @pytest.mark.asyncio
    async def test_underscore_id_is_not_another_car(self, async_client: AsyncClient):
        response = await async_client.get("/api/cars/1_000")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_identifier"

    @pytest.mark.asyncio
    async def test_accident_with_huge_car_id(self, async_client: AsyncClient):
        body = {
            "car_id": int(HUGE_ID),
            "accident_date": "2026-01-31T09:00:00Z",
            "accident_description": "Overflow",
        }

        response = await async_client.post("/api/accidents", json=body)

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_car_with_huge_mileage(self, async_client: AsyncClient, car_payload):
        car_payload["car"]["car_mileage"] = SQLITE_INT_MAX + 1

        response = await async_client.post("/api/cars", json=car_payload)

        assert response.status_code == 400
        assert (await async_client.get("/api/cars")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_listing_is_named(self, async_client: AsyncClient, create_car):
        car = await create_car()

        response = await async_client.get(f"/api/cars/{car['car_id']}/spoilers")

        assert response.status_code == 404
        assert response.json() == {"error": "Unknown listing 'spoilers'", "code": "not_found"}


@pytest_asyncio.fixture
async def non_raising_client(app, db_path):
    """Client that receives the 500 response instead of the re-raised exception"""
    app.dependency_overrides[verify_firebase_token] = lambda: {"sub": "uid1"}
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestUnhandledErrors:
    @pytest.mark.asyncio
    async def test_unexpected_exception_uses_envelope(self, non_raising_client, app, monkeypatch):
        app.dependency_overrides[get_settings] = lambda: Settings(
            R2_ENDPOINT_URL="https://account.r2.cloudflarestorage.com",
            R2_ACCESS_KEY_ID="key-id",
            R2_SECRET_ACCESS_KEY="secret",
        )
        client = MagicMock()
        client.put_object.side_effect = RuntimeError("socket closed")
        monkeypatch.setattr("services.storage.get_s3_client", lambda cfg: client)

        response = await non_raising_client.post(
            "/api/images", files={"file": ("civic.jpg", b"\xff\xd8\xff", "image/jpeg")}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "code": "internal_error"}
