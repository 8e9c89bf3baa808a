"""
AutoTrack - Image Storage Gateway
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-12): Optional key prefix (IMAGE_KEY_PREFIX, e.g. "images/")
v1.0.0 (2026-09-28): Upload images to Cloudflare R2 through its S3 API

The public URL is built from IMAGE_PUBLIC_BASE_URL and the object key; R2 does
not return one from put_object.
"""

import asyncio
import logging
from typing import Any, Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from config import Settings, storage_configured
from errors import ConfigurationError, InternalError

logger = logging.getLogger(__name__)


def get_s3_client(cfg: Settings):
    """Create an S3 client pointed at the R2 endpoint"""
    client_kwargs: Dict[str, Any] = {
        "endpoint_url": cfg.R2_ENDPOINT_URL,
        "aws_access_key_id": cfg.R2_ACCESS_KEY_ID,
        "aws_secret_access_key": cfg.R2_SECRET_ACCESS_KEY,
        "region_name": "auto",
    }
    return boto3.client("s3", **client_kwargs)


def object_key_for(filename: str, cfg: Settings) -> str:
    return f"{cfg.IMAGE_KEY_PREFIX}{filename}"


def public_url_for(key: str, cfg: Settings) -> str:
    return f"{cfg.IMAGE_PUBLIC_BASE_URL.rstrip('/')}/{key}"


async def upload_image(data: bytes, filename: str, content_type: str, cfg: Settings) -> str:
    """
    Store image bytes and return the URL clients should use to fetch them.

    Raises:
        ConfigurationError: R2 credentials or endpoint not configured
        InternalError: the storage backend rejected the write
    """
    if not storage_configured(cfg):
        raise ConfigurationError(
            "Object storage credentials are missing.",
            code="config/missing-storage-credentials",
        )

    key = object_key_for(filename, cfg)
    client = get_s3_client(cfg)
    try:
        # boto3 is blocking
        await asyncio.to_thread(
            client.put_object,
            Bucket=cfg.R2_BUCKET_NAME,
            Key=key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Upload of {key} to bucket {cfg.R2_BUCKET_NAME} failed: {e}", exc_info=True)
        raise InternalError() from e

    logger.info(f"Uploaded {key} ({len(data)} bytes)")
    return public_url_for(key, cfg)
