from contextlib import contextmanager
from functools import lru_cache

from storefront.core.config import settings
from storefront.db.base import SessionLocal
from storefront.storage.base import MediaStore
from storefront.storage.s3_media_store import S3MediaStore


@contextmanager
def db_session_scope():
    """Database session for work outside a request, such as CLI commands"""
    db_session = SessionLocal()
    try:
        yield db_session
    except Exception:
        db_session.rollback()
        raise
    finally:
        db_session.close()


@lru_cache
def get_media_store() -> MediaStore:
    """
    FastAPI dependency for the product media host.

    The store and its boto3 client are built once and shared by every request.
    """
    return S3MediaStore.from_settings(settings)
