"""
Firebase ID token gate tests.

Tokens are signed with a throwaway RSA key whose public half is served in
place of Google's JWK set.
"""

import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import AsyncClient
from jose import jwk, jwt

from config import settings
from errors import Unauthorized
from services.auth import FIREBASE_ISSUER_PREFIX, decode_id_token

PROJECT_ID = "autotrack-test"
KEY_ID = "test-key"


@pytest.fixture(scope="module")
def signing_keys():
    """(private PEM, JWK set containing the public key)"""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk.update({"kid": KEY_ID, "use": "sig"})
    return private_pem, {"keys": [public_jwk]}


def make_token(private_pem: str, **claims) -> str:
    now = int(time.time())
    payload = {
        "sub": "uid1",
        "aud": PROJECT_ID,
        "iss": f"{FIREBASE_ISSUER_PREFIX}{PROJECT_ID}",
        "iat": now,
        "exp": now + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, private_pem, algorithm="RS256", headers={"kid": KEY_ID})


@pytest.fixture
def firebase_project(monkeypatch, signing_keys):
    """Configure a project id and serve the test JWK set"""
    _, jwks = signing_keys
    monkeypatch.setattr(settings, "FIREBASE_PROJECT_ID", PROJECT_ID)

    async def fake_fetch(cfg):
        return jwks

    monkeypatch.setattr("services.auth.fetch_public_keys", fake_fetch)
    return PROJECT_ID


class TestDecodeIdToken:
    def test_valid_token(self, signing_keys):
        private_pem, jwks = signing_keys

        claims = decode_id_token(make_token(private_pem), jwks, PROJECT_ID)

        assert claims["sub"] == "uid1"

    def test_wrong_audience(self, signing_keys):
        private_pem, jwks = signing_keys
        token = make_token(private_pem, aud="someone-else")

        with pytest.raises(Unauthorized):
            decode_id_token(token, jwks, PROJECT_ID)

    def test_wrong_issuer(self, signing_keys):
        private_pem, jwks = signing_keys
        token = make_token(private_pem, iss="https://accounts.example.com")

        with pytest.raises(Unauthorized):
            decode_id_token(token, jwks, PROJECT_ID)

    def test_expired(self, signing_keys):
        private_pem, jwks = signing_keys
        now = int(time.time())
        token = make_token(private_pem, iat=now - 7200, exp=now - 3600)

        with pytest.raises(Unauthorized):
            decode_id_token(token, jwks, PROJECT_ID)

    def test_empty_subject(self, signing_keys):
        private_pem, jwks = signing_keys
        token = make_token(private_pem, sub="")

        with pytest.raises(Unauthorized):
            decode_id_token(token, jwks, PROJECT_ID)

    def test_garbage(self, signing_keys):
        _, jwks = signing_keys

        with pytest.raises(Unauthorized):
            decode_id_token("not.a.token", jwks, PROJECT_ID)


class TestAuthGate:
    @pytest.mark.asyncio
    async def test_health_check_is_public(self, unauthenticated_client: AsyncClient):
        response = await unauthenticated_client.get("/")

        assert response.status_code == 200
        assert response.text == f"{settings.APP_NAME} v{settings.APP_VERSION} is running"

    @pytest.mark.asyncio
    async def test_missing_project_id(self, unauthenticated_client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "FIREBASE_PROJECT_ID", "")

        response = await unauthenticated_client.get("/api/cars")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Firebase project ID is missing.",
            "code": "config/missing-project-id",
        }

    @pytest.mark.asyncio
    async def test_missing_token(self, unauthenticated_client: AsyncClient, firebase_project):
        response = await unauthenticated_client.get("/api/cars")

        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_invalid_token(self, unauthenticated_client: AsyncClient, firebase_project):
        response = await unauthenticated_client.get(
            "/api/cars", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token(self, unauthenticated_client: AsyncClient, firebase_project, signing_keys):
        private_pem, _ = signing_keys
        token = make_token(private_pem)

        response = await unauthenticated_client.get(
            "/api/cars", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_every_router_is_guarded(self, unauthenticated_client: AsyncClient, firebase_project):
        for path in (
            "/api/users", "/api/cars", "/api/accidents", "/api/fuel_efficiencies",
            "/api/maintenances", "/api/periodic_inspections", "/api/tunings",
            "/api/car_inspections",
        ):
            response = await unauthenticated_client.get(path)
            assert response.status_code == 401, path

        response = await unauthenticated_client.post("/api/images")
        assert response.status_code == 401
