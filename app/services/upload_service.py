"""Upload proxy that forwards in-memory files to Cloudinary."""
from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import Settings
from app.core.exceptions import UploadFailedError
from app.schemas.product_schemas import UploadResult

logger = logging.getLogger(__name__)


class CloudinaryError(RuntimeError):
    """Raised when the Cloudinary API call fails or returns an unusable body."""


@dataclass
class FileBuffer:
    """An uploaded file held in memory."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class UploadService:
    """Streams files to the media host under a fixed folder."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.cloud_name = settings.cloudinary_cloud_name
        self.api_key = settings.cloudinary_api_key
        self.api_secret = settings.cloudinary_api_secret
        self.folder = settings.upload_folder
        self.base_url = settings.cloudinary_base_url.rstrip("/")
        self._timeout = httpx.Timeout(settings.upload_timeout_seconds)
        self._transport = transport

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/auto/upload"

    async def upload_single(self, file: FileBuffer) -> UploadResult:
        """
        Raises:
            UploadFailedError: On any failure from the media host
        """
        results = await self._upload_all([file], "Failed to upload image")
        return results[0]

    async def upload_multiple(self, files: List[FileBuffer]) -> List[UploadResult]:
        """
        Upload files concurrently; one failure fails the whole batch.

        Raises:
            UploadFailedError: If any file fails to upload
        """
        return await self._upload_all(files, "Failed to upload images")

    async def _upload_all(self, files: List[FileBuffer], failure_message: str) -> List[UploadResult]:
        logger.info(f"[UPLOAD_SERVICE] Uploading {len(files)} file(s) to folder={self.folder}")
        if not (self.cloud_name and self.api_key and self.api_secret):
            logger.error("[UPLOAD_SERVICE] ✗ Cloudinary credentials are not configured")
            raise UploadFailedError(failure_message)

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            outcomes = await asyncio.gather(
                *(self._upload_one(client, file) for file in files),
                return_exceptions=True,
            )

        for file, outcome in zip(files, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"[UPLOAD_SERVICE] ✗ Upload failed: file={file.filename}, error={outcome}")
                raise UploadFailedError(failure_message) from outcome

        logger.info(f"[UPLOAD_SERVICE] ✓ Uploaded {len(outcomes)} file(s)")
        return [self._to_result(body) for body in outcomes]

    async def _upload_one(self, client: httpx.AsyncClient, file: FileBuffer) -> Dict[str, Any]:
        params = {"folder": self.folder, "timestamp": str(int(time.time()))}
        data = {**params, "api_key": self.api_key, "signature": self._sign(params)}
        try:
            response = await client.post(
                self.upload_url,
                data=data,
                files={"file": (file.filename, file.content, file.content_type)},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CloudinaryError(f"Cloudinary rejected upload: status={exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise CloudinaryError(f"Cloudinary transport error: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise CloudinaryError("Cloudinary returned a non-JSON response") from exc
        if "secure_url" not in body or "public_id" not in body:
            raise CloudinaryError("Cloudinary response is missing secure_url/public_id")
        return body

    def _sign(self, params: Dict[str, str]) -> str:
        """Cloudinary signature: sha1 of sorted key=value pairs followed by the secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    @staticmethod
    def _to_result(body: Dict[str, Any]) -> UploadResult:
        return UploadResult(
            url=body["secure_url"],
            public_id=body["public_id"],
            width=body.get("width"),
            height=body.get("height"),
            format=body.get("format"),
            resource_type=body.get("resource_type"),
        )
