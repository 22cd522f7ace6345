# tests/services/test_product_query_service.py
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from storefront.core.exceptions import ResourceNotFoundError
from storefront.services.product_query_service import ProductQueryService


@pytest.fixture(scope="function")
def query_service(db_session):
    """Create a product query service for testing."""
    return ProductQueryService(db_session)


def test_product_without_reviews_has_zero_rating(query_service, product_factory):
    product = product_factory(name="Mirror A")

    listed = query_service.list_products()[0]
    single = query_service.get_product(product.slug)

    assert listed.average_rating == 0
    assert listed.total_reviews == 0
    assert single.average_rating == 0
    assert single.total_reviews == 0


def test_list_is_newest_first_and_active_only(query_service, product_factory):
    now = datetime.now(timezone.utc)
    product_factory(name="Old Lamp", created_at=now - timedelta(days=2))
    product_factory(name="New Lamp", created_at=now)
    product_factory(name="Hidden Lamp", is_active=False, created_at=now + timedelta(days=1))

    names = [product.name for product in query_service.list_products()]

    assert names == ["New Lamp", "Old Lamp"]


def test_list_and_get_agree_on_rating(query_service, product_factory, add_reviews):
    """Both read paths report the same rounded average for the same reviews."""
    rated = product_factory(name="Rated Mirror")
    other = product_factory(name="Other Mirror")
    add_reviews(rated.id, [5, 4, 4])
    add_reviews(other.id, [1])

    listed = {product.id: product for product in query_service.list_products()}
    single = query_service.get_product(str(rated.id))

    assert listed[rated.id].average_rating == 4.3
    assert listed[rated.id].total_reviews == 3
    assert single.average_rating == listed[rated.id].average_rating
    assert single.total_reviews == listed[rated.id].total_reviews
    assert listed[other.id].average_rating == 1.0


def test_category_and_offer_are_joined(query_service, product_factory, category, offer):
    product = product_factory(name="Sale Mirror", offer=offer)

    listed = query_service.list_products()[0]
    single = query_service.get_product(product.slug)

    for result in (listed, single):
        assert result.category.id == category.id
        assert result.category.name == "Home Decor"
        assert result.offer.title == "Spring Sale"


def test_product_without_offer(query_service, product_factory):
    product = product_factory(name="Plain Mirror")

    assert query_service.get_product(product.slug).offer is None


def test_get_by_slug_then_id(query_service, product_factory):
    product = product_factory(name="Round Mirror")

    assert query_service.get_product(product.slug).id == product.id
    assert query_service.get_product(str(product.id)).id == product.id


def test_inactive_product_is_still_readable_by_key(query_service, product_factory):
    product = product_factory(name="Retired Mirror", is_active=False)

    assert query_service.get_product(product.slug).is_active is False


@pytest.mark.parametrize("key", ["no-such-slug", str(uuid.uuid4())])
def test_unknown_product_raises_not_found(query_service, product_factory, key):
    product_factory(name="Some Mirror")

    with pytest.raises(ResourceNotFoundError) as exc_info:
        query_service.get_product(key)

    assert exc_info.value.message == "Product not found"


def test_wire_format_is_camel_case(query_service, product_factory):
    product = product_factory(name="Mirror A", gallery_count=1)

    body = query_service.get_product(product.slug).to_json()

    assert body["mainImage"]["assetId"] == product.main_image_asset_id
    assert body["galleryImages"][0]["assetId"].endswith("gallery-0.png")
    assert body["averageRating"] == 0
    assert body["totalReviews"] == 0
    assert body["categoryId"] == str(product.category_id)
    assert body["discountPercent"] == 0
