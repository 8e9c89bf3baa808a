"""
AutoTrack - Image Upload Endpoint
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-12): 201 on success; storage errors reported as 500
v1.0.0 (2026-09-28): Initial upload to R2
"""

from pathlib import PurePosixPath
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
import logging

from config import Settings, get_settings
from errors import ValidationError
from services.storage import upload_image

router = APIRouter(prefix="/images", tags=["images"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
async def post_image(
    file: Optional[UploadFile] = File(None),
    cfg: Settings = Depends(get_settings),
):
    """Upload the multipart field "file" and return its public URL"""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", details=[{"loc": ["body", "file"], "msg": "Field required"}])

    data = await file.read()
    if not data:
        raise ValidationError("Uploaded file is empty", details=[{"loc": ["body", "file"], "msg": "Empty file"}])

    # Keys are flat; drop any client-side directory part
    filename = PurePosixPath(file.filename.replace("\\", "/")).name
    url = await upload_image(data, filename, file.content_type, cfg)
    return {"url": url}
