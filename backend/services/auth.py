"""
AutoTrack - Firebase Authentication Gate
Version: 1.0.0

Changelog:
v1.0.0 (2026-09-28): Verify Firebase ID tokens against Google's public JWKs

Firebase ID tokens are RS256 JWTs signed by securetoken@system.gserviceaccount.com.
A token is accepted when its signature matches one of the published keys, its
audience is our Firebase project and its issuer is
https://securetoken.google.com/<project id>. Keys are fetched for every
verification.
"""

from typing import Any, Dict, Optional

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
import logging

from config import Settings, get_settings
from errors import ConfigurationError, InternalError, Unauthorized

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"


async def fetch_public_keys(cfg: Settings) -> Dict[str, Any]:
    """Download the JWK set used to sign Firebase ID tokens"""
    try:
        async with httpx.AsyncClient(timeout=cfg.FIREBASE_JWKS_TIMEOUT) as client:
            response = await client.get(cfg.FIREBASE_JWKS_URL)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to fetch Firebase public keys: {e}", exc_info=True)
        raise InternalError() from e


def decode_id_token(token: str, jwks: Dict[str, Any], project_id: str) -> Dict[str, Any]:
    """
    Verify a Firebase ID token and return its claims.

    Raises:
        Unauthorized: signature, audience, issuer or expiry check failed
    """
    try:
        claims = jwt.decode(
            token,
            jwks,
            algorithms=["RS256"],
            audience=project_id,
            issuer=f"{FIREBASE_ISSUER_PREFIX}{project_id}",
        )
    except JWTError as e:
        logger.info(f"Rejected ID token: {e}")
        raise Unauthorized("Invalid or expired ID token") from e

    if not claims.get("sub"):
        raise Unauthorized("Invalid or expired ID token")
    return claims


async def verify_firebase_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cfg: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Router dependency guarding every authenticated route"""
    project_id = cfg.FIREBASE_PROJECT_ID
    if not project_id:
        raise ConfigurationError(
            "Firebase project ID is missing.",
            code="config/missing-project-id",
        )
    if credentials is None:
        raise Unauthorized("Missing bearer token")

    jwks = await fetch_public_keys(cfg)
    claims = decode_id_token(credentials.credentials, jwks, project_id)
    request.state.firebase_claims = claims
    return claims
