"""HTTP controller for image uploads."""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from catalog.config import get_cloudinary_config
from catalog.services import UploadService

router = APIRouter(tags=["upload"])


def get_upload_service() -> UploadService:
    """Build an UploadService from the Cloudinary configuration."""
    return UploadService(get_cloudinary_config())


@router.post("/upload")
async def upload_image(
    file: Optional[UploadFile] = File(None),
    service: UploadService = Depends(get_upload_service),
) -> JSONResponse:
    """Relay an image to the media host and return its public URL."""
    if file is None:
        result = await service.upload_file(None, None, None)
    else:
        content = await file.read()
        result = await service.upload_file(file.filename, file.content_type, content)

    return JSONResponse(
        status_code=200,
        content={"success": True, "data": {"url": result.url, "public_id": result.public_id}},
    )
