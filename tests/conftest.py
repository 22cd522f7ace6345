# tests/conftest.py
import io
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

# Settings are read at import time; point them at throwaway resources first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_API_KEY"] = ""
os.environ["AWS_S3_BUCKET_NAME"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.exceptions import MediaStoreError
from storefront.db.base import Base, get_db_session
from storefront.db.models import Category, Offer, Product, Review
from storefront.schemas.product import MediaAsset
from storefront.storage.base import MediaStore, MediaUpload


class FakeMediaStore(MediaStore):
    """In-memory media host that records every upload and delete."""

    def __init__(self):
        self.uploaded: List[str] = []
        self.deleted: List[str] = []
        self.delete_attempts: List[str] = []
        self.fail_on_delete = set()
        self.fail_upload_at: Optional[int] = None

    def upload(self, media: MediaUpload, folder: Optional[str] = None) -> MediaAsset:
        if self.fail_upload_at is not None and len(self.uploaded) + 1 >= self.fail_upload_at:
            raise MediaStoreError("upload", f"host rejected {media.filename}")
        asset_id = f"{folder or 'products'}/{len(self.uploaded) + 1}-{media.filename}"
        self.uploaded.append(asset_id)
        return MediaAsset(url=f"https://media.example.com/{asset_id}", asset_id=asset_id)

    def delete(self, asset_id: str) -> None:
        self.delete_attempts.append(asset_id)
        if asset_id in self.fail_on_delete:
            raise MediaStoreError("delete", f"host rejected {asset_id}")
        self.deleted.append(asset_id)

    @property
    def stored(self) -> set:
        """Assets currently on the host"""
        return set(self.uploaded) - set(self.deleted)


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a test database session."""
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()

    yield session

    session.close()


@pytest.fixture(scope="function")
def media_store():
    """Create a fake media host for testing."""
    return FakeMediaStore()


@pytest.fixture(scope="function")
def category(db_session):
    """A persisted category."""
    category = Category(name="Home Decor", slug="home-decor", description="Mirrors, lamps and more")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture(scope="function")
def offer(db_session):
    """A persisted offer."""
    offer = Offer(title="Spring Sale", description="Seasonal discount", discount_percent=15)
    db_session.add(offer)
    db_session.commit()
    db_session.refresh(offer)
    return offer


@pytest.fixture(scope="function")
def product_factory(db_session, category):
    """Insert products directly, bypassing the media host."""
    created = []

    def _create(name="Oak Chair", is_active=True, offer=None, gallery_count=0, created_at=None, **fields):
        slug = fields.pop("slug", f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:8]}")
        product = Product(
            name=name,
            slug=slug,
            category_id=category.id,
            offer_id=offer.id if offer else None,
            price=fields.pop("price", 120.0),
            main_image_url=f"https://media.example.com/products/{slug}-main.png",
            main_image_asset_id=f"products/{slug}-main.png",
            gallery_images=[
                {
                    "url": f"https://media.example.com/products/{slug}-gallery-{index}.png",
                    "asset_id": f"products/{slug}-gallery-{index}.png",
                }
                for index in range(gallery_count)
            ],
            is_active=is_active,
            created_at=created_at or datetime.now(timezone.utc) + timedelta(seconds=len(created)),
            **fields,
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        created.append(product)
        return product

    return _create


@pytest.fixture(scope="function")
def test_client(db_session, media_store):
    """API client wired to the test session and the fake media host."""
    from storefront.api.web_app import app
    from storefront.core.dependencies import get_media_store

    def override_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_media_store] = lambda: media_store

    # No context manager: the startup database check would hit DATABASE_URL
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def make_image():
    """Build small in-memory image uploads."""

    def _make(filename: str = "photo.png", content_type: str = "image/png") -> MediaUpload:
        return MediaUpload(filename=filename, content_type=content_type, stream=io.BytesIO(b"\x89PNG"))

    return _make


@pytest.fixture(scope="function")
def add_reviews(db_session):
    """Insert one review per rating for a product."""

    def _add(product_id, ratings):
        for index, rating in enumerate(ratings):
            db_session.add(
                Review(product_id=product_id, user_name=f"shopper-{index}", rating=rating)
            )
        db_session.commit()

    return _add
