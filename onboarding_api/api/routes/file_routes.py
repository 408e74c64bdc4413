"""
File Routes

GET /download/{filename} - Download an uploaded file as an attachment
GET /uploads/formats - Accepted upload formats and limits
"""

import os

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from onboarding_api.api.deps import get_app_settings, get_upload_rules
from onboarding_api.core.config import Settings
from onboarding_api.utils.file_upload import UploadRules, get_supported_formats

router = APIRouter(tags=["Files"])


@router.get("/download/{filename}")
async def download_file(filename: str, settings: Settings = Depends(get_app_settings)):
    """Stream one file from the upload directory."""
    # Only bare names, nothing that walks out of the upload directory
    if os.path.basename(filename) != filename or filename in ("", ".", ".."):
        raise HTTPException(status_code=404, detail="File not found")

    path = os.path.join(settings.upload_dir, filename)
    if not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(path, filename=filename)


@router.get("/uploads/formats")
async def upload_formats(rules: UploadRules = Depends(get_upload_rules)):
    """Get accepted upload formats, size limit and per-field counts."""
    return get_supported_formats(rules)
