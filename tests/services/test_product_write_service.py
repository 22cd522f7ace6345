# tests/services/test_product_write_service.py
import re
import uuid

import pytest

from storefront.core.exceptions import (
    AssetCleanupError,
    InvalidReferenceError,
    MediaStoreError,
    ResourceNotFoundError,
    ValidationError,
)
from storefront.db.models import Product, Review
from storefront.schemas.payload import DelimitedString, EncodedMapping, ProductPayload, StructuredList
from storefront.services.product_write_service import ProductWriteService


@pytest.fixture(scope="function")
def write_service(db_session, media_store):
    """Create a product write service backed by the fake media host."""
    return ProductWriteService(db_session, media_store)


@pytest.fixture(scope="function")
def mirror_payload(category):
    """Minimal valid create payload."""
    return ProductPayload(name="Mirror A", price="100", category_id=str(category.id))


def test_create_minimal_product(write_service, mirror_payload, media_store, make_image):
    product = write_service.create_product(mirror_payload, [make_image("mirror.png")])

    assert re.match(r"^mirror-a-\d+$", product.slug)
    assert product.discount_percent == 0
    assert product.sizes == []
    assert product.specifications == {}
    assert product.is_active is True
    assert product.offer_id is None
    assert product.main_image.asset_id == media_store.uploaded[0]
    assert product.gallery_images == []


def test_create_full_product(write_service, category, offer, media_store, make_image):
    payload = ProductPayload(
        name="Oak Table",
        price="450.00",
        discount_percent="10",
        category_id=str(category.id),
        offer_id=str(offer.id),
        description="Solid oak",
        about="Made to order",
        is_active="false",
        sizes=DelimitedString(text="S, M, L"),
        colors=StructuredList(items=["Natural", "Walnut"]),
        features=DelimitedString(text='["Oiled", "Extendable"]'),
        specifications=EncodedMapping(text='{"Material": "Oak", "Seats": 6}'),
    )

    product = write_service.create_product(
        payload,
        [make_image("table.jpg", "image/jpeg")],
        [make_image("side.webp", "image/webp"), make_image("top.png")],
    )

    assert product.price == 450.0
    assert product.discount_percent == 10.0
    assert product.offer_id == offer.id
    assert product.is_active is False
    assert product.sizes == ["S", "M", "L"]
    assert product.colors == ["Natural", "Walnut"]
    assert product.add_ons == []
    assert product.features == ["Oiled", "Extendable"]
    assert product.specifications == {"Material": "Oak", "Seats": "6"}
    # Gallery order is preserved
    assert [image.asset_id for image in product.gallery_images] == media_store.uploaded[1:]
    assert len(media_store.uploaded) == 3


@pytest.mark.parametrize(
    "fields",
    [
        {"price": "100"},
        {"name": "Mirror A", "price": "100"},
        {"name": "   ", "price": "100", "category_id": "x"},
        {"name": "Mirror A", "category_id": "x"},
    ],
)
def test_create_requires_name_price_category(write_service, media_store, make_image, fields):
    with pytest.raises(ValidationError) as exc_info:
        write_service.create_product(ProductPayload(**fields), [make_image()])

    assert exc_info.value.message == "name, price, categoryId required"
    assert media_store.uploaded == []


def test_create_with_unknown_category_persists_nothing(write_service, db_session, media_store, make_image):
    payload = ProductPayload(name="Mirror A", price="100", category_id=str(uuid.uuid4()))

    with pytest.raises(InvalidReferenceError) as exc_info:
        write_service.create_product(payload, [make_image()])

    assert exc_info.value.message == "Invalid categoryId"
    assert db_session.query(Product).count() == 0
    assert media_store.uploaded == []


def test_create_with_unparsable_category(write_service, make_image):
    payload = ProductPayload(name="Mirror A", price="100", category_id="not-a-uuid")

    with pytest.raises(InvalidReferenceError):
        write_service.create_product(payload, [make_image()])


def test_create_with_unknown_offer(write_service, mirror_payload, make_image):
    payload = mirror_payload.model_copy(update={"offer_id": str(uuid.uuid4())})

    with pytest.raises(InvalidReferenceError) as exc_info:
        write_service.create_product(payload, [make_image()])

    assert exc_info.value.message == "Invalid offerId"


@pytest.mark.parametrize(
    "price, discount",
    [("abc", None), ("0", None), ("-5", None), ("100", "150"), ("100", "ten")],
)
def test_create_rejects_bad_numbers(write_service, category, media_store, make_image, price, discount):
    payload = ProductPayload(
        name="Mirror A", price=price, discount_percent=discount, category_id=str(category.id)
    )

    with pytest.raises(ValidationError):
        write_service.create_product(payload, [make_image()])

    assert media_store.uploaded == []


def test_create_main_image_rules(write_service, mirror_payload, media_store, make_image):
    with pytest.raises(ValidationError, match="mainImage is required"):
        write_service.create_product(mirror_payload, [])

    with pytest.raises(ValidationError, match="mainImage is required"):
        write_service.create_product(mirror_payload, [make_image(filename="")])

    with pytest.raises(ValidationError, match="Only one mainImage is allowed"):
        write_service.create_product(mirror_payload, [make_image("a.png"), make_image("b.png")])

    with pytest.raises(ValidationError):
        write_service.create_product(mirror_payload, [make_image("notes.txt", "text/plain")])

    with pytest.raises(ValidationError):
        write_service.create_product(
            mirror_payload, [make_image()], [make_image("clip.mp4", "video/mp4")]
        )

    assert media_store.uploaded == []


def test_create_with_malformed_specifications(write_service, mirror_payload, media_store, make_image):
    payload = mirror_payload.model_copy(update={"specifications": EncodedMapping(text="{oops")})

    with pytest.raises(ValidationError):
        write_service.create_product(payload, [make_image()])

    assert media_store.uploaded == []


def test_failed_upload_purges_earlier_uploads(write_service, mirror_payload, db_session, media_store, make_image):
    media_store.fail_upload_at = 3

    with pytest.raises(MediaStoreError):
        write_service.create_product(
            mirror_payload, [make_image("main.png")], [make_image("one.png"), make_image("two.png")]
        )

    assert len(media_store.uploaded) == 2
    assert media_store.stored == set()
    assert db_session.query(Product).count() == 0


def test_update_price_only_leaves_everything_else(write_service, mirror_payload, media_store, make_image):
    payload = mirror_payload.model_copy(update={"sizes": DelimitedString(text="S, M")})
    created = write_service.create_product(payload, [make_image()], [make_image("g.png")])

    updated = write_service.update_product(created.slug, ProductPayload(price="80"))

    assert updated.price == 80.0
    unchanged = created.model_dump(exclude={"price", "updated_at"})
    assert updated.model_dump(exclude={"price", "updated_at"}) == unchanged
    assert media_store.deleted == []


def test_renames_to_same_name_produce_distinct_slugs(write_service, mirror_payload, make_image):
    created = write_service.create_product(mirror_payload, [make_image()])

    first = write_service.update_product(str(created.id), ProductPayload(name="Wall Mirror"))
    second = write_service.update_product(str(created.id), ProductPayload(name="Wall Mirror"))

    assert first.slug.startswith("wall-mirror-")
    assert second.slug.startswith("wall-mirror-")
    assert first.slug != second.slug


def test_update_rejects_empty_name_and_price(write_service, mirror_payload, make_image):
    created = write_service.create_product(mirror_payload, [make_image()])

    with pytest.raises(ValidationError):
        write_service.update_product(created.slug, ProductPayload(name=" "))
    with pytest.raises(ValidationError):
        write_service.update_product(created.slug, ProductPayload(price=""))


def test_update_offer_and_flags(write_service, mirror_payload, offer, make_image):
    created = write_service.create_product(mirror_payload, [make_image()])

    with_offer = write_service.update_product(
        created.slug, ProductPayload(offer_id=str(offer.id), is_active="0")
    )
    assert with_offer.offer_id == offer.id
    assert with_offer.is_active is False

    cleared = write_service.update_product(created.slug, ProductPayload(offer_id=""))
    assert cleared.offer_id is None

    with pytest.raises(InvalidReferenceError):
        write_service.update_product(created.slug, ProductPayload(category_id=str(uuid.uuid4())))


def test_update_present_but_empty_list_clears_it(write_service, mirror_payload, make_image):
    payload = mirror_payload.model_copy(update={"colors": DelimitedString(text="Red, Blue")})
    created = write_service.create_product(payload, [make_image()])

    updated = write_service.update_product(created.slug, ProductPayload(colors=DelimitedString(text="")))

    assert updated.colors == []


def test_update_replaces_main_image(write_service, mirror_payload, media_store, make_image):
    created = write_service.create_product(mirror_payload, [make_image("old.png")])
    old_asset = created.main_image.asset_id

    updated = write_service.update_product(created.slug, ProductPayload(), [make_image("new.png")])

    assert updated.main_image.asset_id != old_asset
    assert media_store.deleted == [old_asset]
    assert media_store.stored == {updated.main_image.asset_id}


def test_update_replaces_whole_gallery(write_service, mirror_payload, media_store, make_image):
    created = write_service.create_product(
        mirror_payload, [make_image()], [make_image("g1.png"), make_image("g2.png")]
    )
    old_gallery = [image.asset_id for image in created.gallery_images]

    updated = write_service.update_product(created.slug, ProductPayload(), None, [make_image("g3.png")])

    assert sorted(media_store.deleted) == sorted(old_gallery)
    assert len(updated.gallery_images) == 1
    assert updated.main_image == created.main_image


def test_update_unknown_product(write_service):
    with pytest.raises(ResourceNotFoundError):
        write_service.update_product("missing-product", ProductPayload(price="10"))


def test_delete_removes_every_asset_then_the_record(
    write_service, mirror_payload, db_session, media_store, make_image, add_reviews
):
    created = write_service.create_product(
        mirror_payload, [make_image()], [make_image("g1.png"), make_image("g2.png")]
    )
    add_reviews(created.id, [5, 3])

    write_service.delete_product(created.slug)

    # 1 main + 2 gallery
    assert len(media_store.deleted) == 3
    assert media_store.stored == set()
    assert db_session.query(Product).count() == 0
    # Reviews are left for the cleanup hook
    assert db_session.query(Review).count() == 2


def test_delete_keeps_record_when_an_asset_survives(
    write_service, mirror_payload, db_session, media_store, make_image
):
    created = write_service.create_product(
        mirror_payload, [make_image()], [make_image("g1.png"), make_image("g2.png")]
    )
    stuck = created.gallery_images[0].asset_id
    media_store.fail_on_delete.add(stuck)

    with pytest.raises(AssetCleanupError) as exc_info:
        write_service.delete_product(str(created.id))

    assert exc_info.value.failed_asset_ids == [stuck]
    assert exc_info.value.public_message == "Server error"
    # Every asset was still attempted
    assert len(media_store.delete_attempts) == 3
    assert db_session.query(Product).count() == 1

    # Retrying once the host recovers finishes the job
    media_store.fail_on_delete.clear()
    write_service.delete_product(str(created.id))
    assert db_session.query(Product).count() == 0


def test_delete_unknown_product(write_service, media_store):
    with pytest.raises(ResourceNotFoundError):
        write_service.delete_product(str(uuid.uuid4()))

    assert media_store.delete_attempts == []


def test_create_with_blank_is_active_defaults_to_active(write_service, mirror_payload, make_image):
    payload = mirror_payload.model_copy(update={"is_active": "  "})

    product = write_service.create_product(payload, [make_image()])

    assert product.is_active is True


def _assert_references_stored(db_session, media_store):
    row = db_session.query(Product).one()
    db_session.refresh(row)
    assert row.main_image_asset_id in media_store.stored
    for image in row.gallery_images:
        assert image["asset_id"] in media_store.stored
    return row


def test_update_keeps_old_media_when_gallery_upload_fails(
    write_service, mirror_payload, db_session, media_store, make_image
):
    created = write_service.create_product(mirror_payload, [make_image("old.png")], [make_image("g1.png")])
    # Upload 3 (the new main image) succeeds, upload 4 (the gallery) fails
    media_store.fail_upload_at = 4

    with pytest.raises(MediaStoreError):
        write_service.update_product(created.slug, ProductPayload(), [make_image("new.png")], [make_image("g2.png")])

    row = _assert_references_stored(db_session, media_store)
    assert row.main_image_asset_id == created.main_image.asset_id
    assert media_store.deleted == ["products/3-new.png"]
    assert media_store.stored == {created.main_image.asset_id, created.gallery_images[0].asset_id}


def test_update_survives_failed_delete_of_replaced_gallery(
    write_service, mirror_payload, db_session, media_store, make_image
):
    created = write_service.create_product(
        mirror_payload, [make_image()], [make_image("g1.png"), make_image("g2.png")]
    )
    stuck = created.gallery_images[0].asset_id
    media_store.fail_on_delete.add(stuck)

    updated = write_service.update_product(created.slug, ProductPayload(), None, [make_image("g3.png")])

    assert [image.asset_id for image in updated.gallery_images] == ["products/4-g3.png"]
    assert media_store.delete_attempts == [stuck, created.gallery_images[1].asset_id]
    _assert_references_stored(db_session, media_store)
    # The stuck asset is left behind, unreferenced
    assert stuck in media_store.stored


def test_update_keeps_old_media_when_save_fails(
    write_service, mirror_payload, db_session, media_store, make_image, monkeypatch
):
    created = write_service.create_product(mirror_payload, [make_image("old.png")], [make_image("g1.png")])

    def failing_update(db_product, changes):
        for key, value in changes.items():
            setattr(db_product, key, value)
        raise RuntimeError("commit failed")

    monkeypatch.setattr(write_service.product_repo, "update", failing_update)

    with pytest.raises(RuntimeError):
        write_service.update_product(
            created.slug, ProductPayload(price="90"), [make_image("new.png")], [make_image("g2.png")]
        )

    row = _assert_references_stored(db_session, media_store)
    assert row.main_image_asset_id == created.main_image.asset_id
    assert row.price == 100
    assert sorted(media_store.deleted) == ["products/3-new.png", "products/4-g2.png"]
