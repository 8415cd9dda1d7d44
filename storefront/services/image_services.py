"""
Client for the third-party image host (ImgBB-compatible API).

Two operations only: store an image and get back its public URL plus an
external id (the host's delete URL), and delete an image by that id.
Every non-success answer becomes an ExternalServiceError. No retries.
"""
from __future__ import annotations

import base64
import logging
from typing import Optional, Sequence, Tuple

import httpx

from storefront.core.config import settings
from storefront.core.exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


def split_extension(filename: str) -> Tuple[str, str]:
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, ext.lower()


def validate_image(
    filename: Optional[str],
    size: int,
    max_bytes: Optional[int] = None,
    allowed_extensions: Optional[Sequence[str]] = None,
) -> None:
    max_bytes = max_bytes if max_bytes is not None else settings.IMAGE_MAX_BYTES
    allowed = allowed_extensions or settings.IMAGE_ALLOWED_EXTENSIONS

    if size <= 0:
        raise ValidationError("No file selected")
    if size > max_bytes:
        raise ValidationError(f"File must not exceed {max_bytes // (1024 * 1024)}MB")
    if not filename:
        raise ValidationError("Invalid file name")
    _, ext = split_extension(filename)
    if ext not in allowed:
        raise ValidationError(f"Unsupported file type. Use: {', '.join(allowed)}")


class ImageHostClient:
    def __init__(
        self,
        upload_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.upload_url = upload_url or settings.IMAGE_HOST_URL
        self.api_key = api_key if api_key is not None else settings.IMAGE_HOST_API_KEY
        self.timeout = timeout or settings.IMAGE_HOST_TIMEOUT
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def store(self, file_bytes: bytes, filename: str) -> Tuple[str, str]:
        """Upload an image. Returns (public url, external id used for deletion)."""
        stem, _ = split_extension(filename)
        data = {
            "key": self.api_key,
            "image": base64.b64encode(file_bytes).decode("ascii"),
            "name": stem,
        }
        try:
            async with self._client() as client:
                response = await client.post(self.upload_url, data=data)
        except httpx.HTTPError as exc:
            logger.error("image host unreachable", extra={"error": str(exc)})
            raise ExternalServiceError("Image host unreachable") from exc

        if not response.is_success:
            logger.error("image upload failed", extra={"status": response.status_code})
            raise ExternalServiceError(f"Image host answered {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExternalServiceError("Image host returned an invalid body") from exc

        if not payload.get("success"):
            message = (payload.get("error") or {}).get("message", "unknown error")
            logger.error("image upload rejected", extra={"error": message})
            raise ExternalServiceError(f"Image host error: {message}")

        data_out = payload.get("data") or {}
        url, external_id = data_out.get("url"), data_out.get("delete_url")
        if not url or not external_id:
            raise ExternalServiceError("Image host response is missing url or delete_url")

        logger.info("image uploaded", extra={"file_name": filename, "size": len(file_bytes)})
        return url, external_id

    async def delete(self, external_id: str) -> bool:
        """Delete an image through its delete URL."""
        try:
            async with self._client() as client:
                response = await client.get(external_id)
        except httpx.HTTPError as exc:
            logger.error("image host unreachable", extra={"error": str(exc)})
            raise ExternalServiceError("Image host unreachable") from exc

        if not response.is_success:
            logger.error("image delete failed", extra={"status": response.status_code})
            raise ExternalServiceError("Unable to delete the image")

        logger.info("image deleted")
        return True
