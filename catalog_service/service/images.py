import os
import time
import uuid
from typing import Any, Protocol

from fastapi import UploadFile
from loguru import logger
from pydantic import BaseModel


class ImageUploader(Protocol):
    async def upload(self, blob_name: str, data: bytes, content_type: str) -> str: ...


class UploadedImage(BaseModel):
    data: bytes
    filename: str
    content_type: str = "application/octet-stream"


async def read_upload(file: UploadFile | None) -> UploadedImage | None:
    """Buffer a multipart part in memory; a part without a filename counts as absent."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    return UploadedImage(
        data=data,
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
    )


def make_blob_name(filename: str) -> str:
    _, ext = os.path.splitext(filename)
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext.lower()}"


async def attach_image(
    fields: dict[str, Any],
    image: UploadedImage | None,
    storage: ImageUploader,
) -> dict[str, Any]:
    """Return the fields to persist, with ``imageUrl`` set when an image was sent.

    The upload is awaited to completion before returning, so a failed
    upload (UpstreamUploadError) propagates before any document write.
    """
    result = dict(fields)
    if image is None:
        logger.debug("No image supplied; persisting fields as given")
        return result

    blob_name = make_blob_name(image.filename)
    result["imageUrl"] = await storage.upload(blob_name, image.data, image.content_type)
    return result
