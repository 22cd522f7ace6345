from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional
import logging

from storefront.schemas.product import MediaAsset

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
    "image/avif",
}


@dataclass
class MediaUpload:
    """A file received from the client, not yet on the media host."""

    filename: str
    content_type: Optional[str]
    stream: BinaryIO


class MediaStore(ABC):
    """Abstract base class for remote media hosts."""

    @abstractmethod
    def upload(self, media: MediaUpload, folder: Optional[str] = None) -> MediaAsset:
        """Upload a file.

        Args:
            media: File to upload
            folder: Optional folder/prefix on the host

        Returns:
            Public URL and the asset identifier used to delete it later

        Raises:
            MediaStoreError: If the host rejects the upload
        """
        pass

    @abstractmethod
    def delete(self, asset_id: str) -> None:
        """Delete an asset by identifier.

        Deleting an asset that no longer exists must succeed, so a failed
        cleanup can simply be retried.

        Raises:
            MediaStoreError: If the host rejects the delete
        """
        pass
