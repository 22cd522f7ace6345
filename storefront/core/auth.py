"""Authentication for admin (mutating) routes."""
from typing import Optional
import secrets
from fastapi import HTTPException, Request
from fastapi.security import HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED
import logging

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class AdminAPIKeyAuth(HTTPBearer):
    """Admin API key authentication using Bearer token scheme."""

    def __init__(self):
        # Missing credentials are handled here, not by HTTPBearer
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[str]:
        """
        Validate the admin API key.

        Returns:
            The presented key, or None when no ADMIN_API_KEY is configured

        Raises:
            HTTPException: If the key is missing or wrong
        """
        expected = settings.ADMIN_API_KEY
        if not expected:
            return None

        credentials = await super().__call__(request)
        if credentials is None or not secrets.compare_digest(
            credentials.credentials.encode(), expected.encode()
        ):
            client = request.client.host if request.client else "unknown"
            logger.warning(f"Invalid admin API key attempted from {client}")
            raise HTTPException(
                status_code=HTTP_401_UNAUTHORIZED,
                detail="Invalid API key",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return credentials.credentials


api_key_auth_admin = AdminAPIKeyAuth()
