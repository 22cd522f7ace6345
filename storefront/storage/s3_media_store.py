import boto3
import logging
import os
import uuid
from typing import Optional
from botocore.exceptions import BotoCoreError, ClientError

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import MediaStoreError
from storefront.schemas.product import MediaAsset
from storefront.storage.base import MediaStore, MediaUpload

logger = logging.getLogger(__name__)


class S3MediaStore(MediaStore):
    """S3 bucket used as the product media host"""

    def __init__(self, s3_client, bucket_name: str, base_url: str, folder: str = "products"):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.base_url = base_url.rstrip("/")
        self.folder = folder.strip("/")

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "S3MediaStore":
        """Build a store with a boto3 client from application settings"""
        s3_client = None
        if settings.AWS_S3_BUCKET_NAME:
            s3_client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
                region_name=settings.AWS_REGION,
            )
        return cls(
            s3_client=s3_client,
            bucket_name=settings.AWS_S3_BUCKET_NAME,
            base_url=settings.media_base_url,
            folder=settings.MEDIA_FOLDER,
        )

    def _require_client(self, operation: str):
        if not self.s3_client:
            logger.error("S3 client not initialized. Check AWS_S3_BUCKET_NAME configuration.")
            raise MediaStoreError(operation, "S3 bucket is not configured")
        return self.s3_client

    def build_key(self, filename: str, folder: Optional[str] = None) -> str:
        """
        Generate the object key for a new upload
        Example: photo.PNG -> products/3f2a...9c.png
        """
        extension = os.path.splitext(filename or "")[1].lower()
        prefix = (folder or self.folder).strip("/")
        name = f"{uuid.uuid4().hex}{extension}"
        return f"{prefix}/{name}" if prefix else name

    def upload(self, media: MediaUpload, folder: Optional[str] = None) -> MediaAsset:
        client = self._require_client("upload")
        key = self.build_key(media.filename, folder)

        extra_args = {}
        if media.content_type:
            extra_args["ContentType"] = media.content_type

        try:
            client.upload_fileobj(media.stream, self.bucket_name, key, ExtraArgs=extra_args)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading {media.filename} to s3://{self.bucket_name}/{key}: {e}")
            raise MediaStoreError("upload", str(e), details={"key": key}) from e

        logger.info(f"Uploaded {media.filename} to s3://{self.bucket_name}/{key}")
        return MediaAsset(url=f"{self.base_url}/{key}", asset_id=key)

    def delete(self, asset_id: str) -> None:
        client = self._require_client("delete")

        try:
            # S3 reports success for keys that do not exist
            client.delete_object(Bucket=self.bucket_name, Key=asset_id)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting s3://{self.bucket_name}/{asset_id}: {e}")
            raise MediaStoreError("delete", str(e), details={"key": asset_id}) from e

        logger.info(f"Deleted s3://{self.bucket_name}/{asset_id}")
