"""
Exception taxonomy for the storefront API.

Every failure a handler can report maps onto one of these classes; the
exception handlers in ``storefront.api.web_app`` render them as
``{"message": ...}`` with the class's status code.
"""
from typing import Any, Dict, List, Optional
from fastapi import status


class StorefrontError(Exception):
    """Base class for errors reported to API callers"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller"""
        return self.message


class ValidationError(StorefrontError):
    """Raised when required input is missing or malformed"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: str = None, details: Optional[Dict[str, Any]] = None):
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message, details)


class InvalidReferenceError(StorefrontError):
    """Raised when a referenced category or offer does not exist"""

    status_code = status.HTTP_400_BAD_REQUEST


class ResourceNotFoundError(StorefrontError):
    """Raised when a requested resource is not found"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: str, details: Optional[Dict[str, Any]] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found", details)


class ServerError(StorefrontError):
    """Unexpected failure; the caller only ever sees a generic message"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    @property
    def public_message(self) -> str:
        return "Server error"


class MediaStoreError(ServerError):
    """Raised when the remote media host rejects an upload or delete"""

    def __init__(self, operation: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        super().__init__(f"Media store {operation} failed: {message}", details)


class AssetCleanupError(ServerError):
    """Raised when one or more media assets could not be deleted"""

    def __init__(self, failed_asset_ids: List[str]):
        self.failed_asset_ids = list(failed_asset_ids)
        super().__init__(
            f"Failed to delete {len(self.failed_asset_ids)} media asset(s)",
            details={"failed_asset_ids": self.failed_asset_ids},
        )
