from storefront.storage.base import ALLOWED_IMAGE_TYPES, MediaStore, MediaUpload
from storefront.storage.s3_media_store import S3MediaStore

__all__ = ["ALLOWED_IMAGE_TYPES", "MediaStore", "MediaUpload", "S3MediaStore"]
