from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from storefront.core.config import settings
from storefront.core.exceptions import ExternalServiceError, ValidationError
from storefront.services.image_services import ImageHostClient, validate_image


router = APIRouter(prefix=settings.API_PREFIX, tags=["images"])
logger = logging.getLogger(__name__)


def get_image_client() -> ImageHostClient:
    return ImageHostClient()


@router.post("/upload-image")
async def upload_image(
    image: UploadFile = File(...),
    client: ImageHostClient = Depends(get_image_client),
):
    """Forward an uploaded image to the image host and return its public URL."""
    content = await image.read()
    try:
        validate_image(image.filename, len(content))
        url, delete_url = await client.store(content, image.filename)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return {
        "success": True,
        "imagePath": url,
        "deleteUrl": delete_url,
        "fileName": image.filename,
        "size": len(content),
    }


@router.delete("/delete-image")
async def delete_image(
    deleteUrl: str,
    client: ImageHostClient = Depends(get_image_client),
):
    try:
        await client.delete(deleteUrl)
    except ExternalServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return {"success": True, "message": "Image deleted"}
