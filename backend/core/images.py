"""core/images.py — Image uploads for universities and results.

Handlers depend on the ImageStore capability and receive the concrete store
through api.dependencies.get_image_store, so tests can swap in a fake.
CloudinaryImageStore is the production implementation; credentials come from
the CLOUDINARY_* settings.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional, Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from core.config import Settings
from core.errors import StorageFailure

logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    def upload(self, file: BinaryIO, filename: Optional[str] = None) -> str:
        """Store the image and return its public URL."""
        ...


class CloudinaryImageStore:
    def __init__(self, settings: Settings) -> None:
        self.folder = settings.cloudinary_folder
        self.configured = settings.cloudinary_configured
        if self.configured:
            cloudinary.config(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
                secure=True,
            )

    def upload(self, file: BinaryIO, filename: Optional[str] = None) -> str:
        if not self.configured:
            raise StorageFailure("Image storage is not configured")
        try:
            result = cloudinary.uploader.upload(
                file,
                folder=self.folder,
                resource_type="image",
            )
        except CloudinaryError as exc:
            logger.error(
                "image upload failed",
                extra={"upload_filename": filename, "error": str(exc)},
            )
            raise StorageFailure("Image upload failed") from exc

        logger.info(
            "image uploaded",
            extra={"upload_filename": filename, "public_id": result.get("public_id")},
        )
        return result["secure_url"]
