"""Object storage service using MinIO"""

import logging
import uuid
from datetime import timedelta
from typing import Dict, FrozenSet, Optional

from minio import Minio
from minio.error import S3Error

from ...core.config import settings
from ...core.errors import UpstreamError, ValidationError
from ...domain.enums import UploadPurpose

logger = logging.getLogger(__name__)

AVATAR_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})
DELIVERY_CONTENT_TYPES = frozenset({
    "video/mp4", "video/quicktime", "video/x-msvideo",
    "audio/mpeg", "audio/wav", "audio/mp4",
    "image/jpeg", "image/png", "image/gif",
    "application/pdf", "text/plain",
})

UPLOAD_RULES: Dict[UploadPurpose, tuple] = {
    UploadPurpose.AVATAR: ("avatars", AVATAR_CONTENT_TYPES),
    UploadPurpose.DELIVERY: ("deliveries", DELIVERY_CONTENT_TYPES),
}


def build_upload_key(purpose: UploadPurpose, owner_id: str, content_type: Optional[str]) -> str:
    """Validate the content type for a purpose and return a fresh object key"""
    if not content_type:
        raise ValidationError("Content type is required")
    if purpose not in UPLOAD_RULES:
        raise ValidationError("Invalid upload purpose")

    folder, allowed = UPLOAD_RULES[purpose]
    if content_type not in allowed:
        raise ValidationError("Unsupported file format")

    extension = content_type.split("/")[1]
    return f"{folder}/{owner_id}/{uuid.uuid4()}.{extension}"


class StorageService:

    def __init__(self):
        self.client = Minio(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SECURE,
            region=settings.MINIO_REGION
        )
        self.bucket = settings.MINIO_BUCKET_NAME
        self.ttl = timedelta(seconds=settings.SIGNED_URL_TTL_SECONDS)

    async def get_signed_upload_url(self, key: str, content_type: str, ttl: Optional[timedelta] = None) -> str:
        # Presigned PUTs cannot pin Content-Type, so the key extension carries it
        try:
            return self.client.presigned_put_object(self.bucket, key, expires=ttl or self.ttl)
        except S3Error as e:
            logger.error("Failed to sign upload for %s (%s): %s", key, content_type, e)
            raise UpstreamError("Failed to generate upload URL") from e

    async def get_signed_download_url(self, key: str, ttl: Optional[timedelta] = None) -> str:
        try:
            return self.client.presigned_get_object(self.bucket, key, expires=ttl or self.ttl)
        except S3Error as e:
            logger.error("Failed to sign download for %s: %s", key, e)
            raise UpstreamError("Failed to generate download URL") from e

    async def delete_file(self, key: str) -> None:
        try:
            self.client.remove_object(self.bucket, key)
        except S3Error as e:
            logger.error("Failed to delete %s: %s", key, e)
            raise UpstreamError("Failed to delete file") from e
