"""
Cloudinary-backed image storage.

Uploads a byte buffer under a caller-chosen blob name as a publicly
delivered asset and hands back its HTTPS URL.
"""

import base64
import os

import cloudinary
import cloudinary.uploader
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from catalog_service.core.config import Settings
from catalog_service.core.errors import UpstreamUploadError
from catalog_service.core.metrics import IMAGE_UPLOADS_TOTAL


class ImageStorage:
    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        folder: str = "catalog",
        service_name: str = "catalog",
    ):
        self.folder = folder
        self.service_name = service_name
        self.configured = False

        if cloud_name and api_key and api_secret:
            self.configure(cloud_name, api_key, api_secret)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStorage":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            folder=settings.CLOUDINARY_FOLDER,
            service_name=settings.SERVICE_NAME,
        )

    def configure(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self.cloud_name = cloud_name
        self.configured = True
        logger.info("Cloudinary configured for cloud: {cloud}", cloud=cloud_name)

    def _upload_sync(self, blob_name: str, data: bytes, content_type: str) -> dict:
        # Cloudinary appends the detected format to the delivery URL itself
        public_id, _ = os.path.splitext(blob_name)
        data_uri = f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"
        return cloudinary.uploader.upload(
            data_uri,
            public_id=public_id,
            folder=self.folder,
            resource_type="auto",
            type="upload",
            overwrite=False,
        )

    async def upload(self, blob_name: str, data: bytes, content_type: str) -> str:
        """Upload ``data`` as ``blob_name`` and return its public URL.

        Raises UpstreamUploadError on any failure, so callers can stop
        before touching the document store.
        """
        if not self.configured:
            IMAGE_UPLOADS_TOTAL.labels(service=self.service_name, status="not_configured").inc()
            logger.error("Image upload requested but Cloudinary is not configured")
            raise UpstreamUploadError("Image storage is not configured")

        logger.info(
            "Uploading blob={blob} ({size} bytes, content_type={content_type})",
            blob=blob_name,
            size=len(data),
            content_type=content_type,
        )
        try:
            result = await run_in_threadpool(self._upload_sync, blob_name, data, content_type)
            url = result["secure_url"]
        except Exception as e:
            IMAGE_UPLOADS_TOTAL.labels(service=self.service_name, status="error").inc()
            logger.exception("Image upload error for blob={blob}: {error}", blob=blob_name, error=e)
            raise UpstreamUploadError() from e

        IMAGE_UPLOADS_TOTAL.labels(service=self.service_name, status="success").inc()
        logger.info("Image uploaded: blob={blob}, url={url}", blob=blob_name, url=url)
        return url
