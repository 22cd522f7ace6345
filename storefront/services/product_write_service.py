# storefront/services/product_write_service.py
from typing import List, Optional, Sequence
from uuid import UUID
import logging

from storefront.core.exceptions import (
    AssetCleanupError,
    InvalidReferenceError,
    MediaStoreError,
    ResourceNotFoundError,
    ValidationError,
)
from storefront.db.models.category import Category
from storefront.db.models.product import Product
from storefront.db.repositories.category_repository import CategoryRepository
from storefront.db.repositories.offer_repository import OfferRepository
from storefront.db.repositories.product_repository import ProductRepository, parse_uuid
from storefront.schemas.payload import ProductPayload
from storefront.schemas.product import MediaAsset, ProductCreate, ProductInDB
from storefront.storage.base import ALLOWED_IMAGE_TYPES, MediaStore, MediaUpload
from storefront.utils.payload import (
    coerce_bool,
    coerce_number,
    normalize_list,
    normalize_specifications,
)
from storefront.utils.slug import generate_unique_slug

logger = logging.getLogger(__name__)

LIST_FIELDS = ("sizes", "colors", "add_ons", "features")
TEXT_FIELDS = ("description", "about")


def _has_value(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ""


class ProductWriteService:
    """
    Create, update and delete products together with their media.

    Every input is validated before anything reaches the media host, so a
    rejected request never uploads or deletes an asset. Assets uploaded by a
    request that then fails are purged again.
    """

    def __init__(self, db_session, media_store: MediaStore):
        self.product_repo = ProductRepository(db_session)
        self.category_repo = CategoryRepository(db_session)
        self.offer_repo = OfferRepository(db_session)
        self.media_store = media_store

    # Validation

    def _resolve_product(self, id_or_slug: str) -> Product:
        product = self.product_repo.get_by_slug_or_id(id_or_slug)
        if not product:
            raise ResourceNotFoundError("Product", id_or_slug)
        return product

    def _require_category(self, category_id: Optional[str]) -> Category:
        category_uuid = parse_uuid(category_id)
        category = self.category_repo.get_by_id(category_uuid) if category_uuid else None
        if not category:
            raise InvalidReferenceError(
                "Invalid categoryId", details={"categoryId": category_id}
            )
        return category

    def _resolve_offer_id(self, offer_id: Optional[str]) -> Optional[UUID]:
        """Empty means no offer; anything else must name an existing offer"""
        if not _has_value(offer_id):
            return None
        offer_uuid = parse_uuid(offer_id.strip())
        offer = self.offer_repo.get_by_id(offer_uuid) if offer_uuid else None
        if not offer:
            raise InvalidReferenceError("Invalid offerId", details={"offerId": offer_id})
        return offer.id

    @staticmethod
    def _parse_price(value: Optional[str]) -> float:
        if not _has_value(value):
            raise ValidationError("price must not be empty", field="price")
        price = coerce_number(value, "price")
        if price <= 0:
            raise ValidationError("price must be a positive number", field="price")
        return price

    @staticmethod
    def _parse_discount(value: Optional[str]) -> float:
        if not _has_value(value):
            return 0.0
        discount = coerce_number(value, "discountPercent")
        if not 0 <= discount <= 100:
            raise ValidationError(
                "discountPercent must be between 0 and 100", field="discountPercent"
            )
        return discount

    @staticmethod
    def _present(files: Optional[Sequence[MediaUpload]]) -> List[MediaUpload]:
        """Drop empty file parts (blank filename)"""
        return [media for media in files or [] if media is not None and media.filename]

    @staticmethod
    def _check_images(files: Sequence[MediaUpload], field: str) -> None:
        for media in files:
            if media.content_type not in ALLOWED_IMAGE_TYPES:
                raise ValidationError(
                    f"{media.filename} is not a supported image type", field=field
                )

    def _main_image(self, files: Optional[Sequence[MediaUpload]], required: bool) -> Optional[MediaUpload]:
        main_images = self._present(files)
        if not main_images:
            if required:
                raise ValidationError("mainImage is required", field="mainImage")
            return None
        if len(main_images) > 1:
            raise ValidationError("Only one mainImage is allowed", field="mainImage")
        self._check_images(main_images, "mainImage")
        return main_images[0]

    def _gallery(self, files: Optional[Sequence[MediaUpload]]) -> List[MediaUpload]:
        gallery = self._present(files)
        self._check_images(gallery, "galleryImages")
        return gallery

    # Media

    def _upload(self, media: MediaUpload, uploaded: List[MediaAsset]) -> MediaAsset:
        asset = self.media_store.upload(media)
        uploaded.append(asset)
        return asset

    def _purge(self, assets: Sequence[MediaAsset]) -> None:
        """Best-effort removal of assets uploaded by a failed request"""
        for asset in assets:
            try:
                self.media_store.delete(asset.asset_id)
                logger.info(f"Purged unreferenced asset {asset.asset_id}")
            except MediaStoreError as e:
                logger.warning(f"Could not purge unreferenced asset {asset.asset_id}: {e}")

    def _new_slug(self, name: str) -> str:
        return generate_unique_slug(name, self.product_repo.slug_exists)

    # Operations

    def create_product(
        self,
        payload: ProductPayload,
        main_images: Optional[Sequence[MediaUpload]] = None,
        gallery_images: Optional[Sequence[MediaUpload]] = None,
    ) -> ProductInDB:
        """
        Create a product and upload its media.

        Raises:
            ValidationError: Missing or malformed input, or no mainImage
            InvalidReferenceError: categoryId or offerId does not resolve
            MediaStoreError: The media host failed
        """
        name = (payload.name or "").strip()
        if not name or not _has_value(payload.price) or not _has_value(payload.category_id):
            raise ValidationError("name, price, categoryId required")

        price = self._parse_price(payload.price)
        discount_percent = self._parse_discount(payload.discount_percent)
        category = self._require_category(payload.category_id.strip())
        offer_id = self._resolve_offer_id(payload.offer_id)
        main_image_file = self._main_image(main_images, required=True)
        gallery_files = self._gallery(gallery_images)

        lists = {field: normalize_list(getattr(payload, field)) for field in LIST_FIELDS}
        specifications = normalize_specifications(payload.specifications)
        is_active = True
        if payload.provided("is_active") and _has_value(payload.is_active):
            is_active = coerce_bool(payload.is_active, "isActive")

        uploaded: List[MediaAsset] = []
        try:
            main_image = self._upload(main_image_file, uploaded)
            gallery = [self._upload(media, uploaded) for media in gallery_files]

            product_data = ProductCreate(
                name=name,
                slug=self._new_slug(name),
                category_id=category.id,
                offer_id=offer_id,
                price=price,
                discount_percent=discount_percent,
                main_image=main_image,
                gallery_images=gallery,
                specifications=specifications,
                description=payload.description,
                about=payload.about,
                is_active=is_active,
                **lists,
            )
            product = self.product_repo.create(product_data)
        except Exception:
            self.product_repo.rollback()
            self._purge(uploaded)
            raise

        logger.info(f"Created product {product.id} ({product.slug}) with {len(gallery)} gallery image(s)")
        return ProductInDB.model_validate(product)

    def update_product(
        self,
        id_or_slug: str,
        payload: ProductPayload,
        main_images: Optional[Sequence[MediaUpload]] = None,
        gallery_images: Optional[Sequence[MediaUpload]] = None,
    ) -> ProductInDB:
        """
        Partially update a product.

        Only fields present in the payload change. A new mainImage or a new
        set of galleryImages replaces the stored media. New files are uploaded
        before the row is saved, and the replaced assets are deleted from the
        media host only after the save succeeds; a replaced asset that fails
        to delete is logged and left on the host.

        Raises:
            ResourceNotFoundError: The product does not resolve
            ValidationError: Malformed input
            InvalidReferenceError: categoryId or offerId does not resolve
            MediaStoreError: The media host failed
        """
        product = self._resolve_product(id_or_slug)
        product_id = product.id
        changes = {}

        if payload.provided("name"):
            name = (payload.name or "").strip()
            if not name:
                raise ValidationError("name must not be empty", field="name")
            changes["name"] = name
        if payload.provided("price"):
            changes["price"] = self._parse_price(payload.price)
        if payload.provided("discount_percent"):
            changes["discount_percent"] = self._parse_discount(payload.discount_percent)
        if payload.provided("category_id"):
            changes["category_id"] = self._require_category(
                (payload.category_id or "").strip()
            ).id
        if payload.provided("offer_id"):
            changes["offer_id"] = self._resolve_offer_id(payload.offer_id)
        for field in LIST_FIELDS:
            if payload.provided(field):
                changes[field] = normalize_list(getattr(payload, field))
        if payload.provided("specifications"):
            changes["specifications"] = normalize_specifications(payload.specifications)
        for field in TEXT_FIELDS:
            if payload.provided(field):
                changes[field] = getattr(payload, field)
        if payload.provided("is_active"):
            changes["is_active"] = coerce_bool(payload.is_active, "isActive")

        main_image_file = self._main_image(main_images, required=False)
        gallery_files = self._gallery(gallery_images)

        uploaded: List[MediaAsset] = []
        replaced: List[str] = []
        try:
            if "name" in changes:
                changes["slug"] = self._new_slug(changes["name"])

            # Every new file is on the host before any reference changes
            if main_image_file:
                main_image = self._upload(main_image_file, uploaded)
                replaced.append(product.main_image_asset_id)
                changes["main_image_url"] = main_image.url
                changes["main_image_asset_id"] = main_image.asset_id

            if gallery_files:
                gallery = [self._upload(media, uploaded) for media in gallery_files]
                replaced.extend(image["asset_id"] for image in product.gallery_images or [])
                changes["gallery_images"] = [image.model_dump() for image in gallery]

            product = self.product_repo.update(product, changes)
        except Exception:
            self.product_repo.rollback()
            self._purge(uploaded)
            raise

        # Replaced assets go only once the row no longer references them
        for asset_id in replaced:
            try:
                self.media_store.delete(asset_id)
            except MediaStoreError as e:
                logger.warning(f"Replaced asset {asset_id} of product {product_id} left on the host: {e}")

        logger.info(f"Updated product {product_id} fields: {sorted(changes)}")
        return ProductInDB.model_validate(product)

    def delete_product(self, id_or_slug: str) -> None:
        """
        Delete a product and every media asset it references.

        Each asset deletion is attempted even if an earlier one fails. If any
        fails, the record is kept so it still points at the surviving assets
        and the request can be retried; deleting an already-deleted asset
        succeeds.

        Raises:
            ResourceNotFoundError: The product does not resolve
            AssetCleanupError: One or more assets could not be deleted
        """
        product = self._resolve_product(id_or_slug)
        product_id = product.id
        asset_ids = product.asset_ids

        failed = []
        for asset_id in asset_ids:
            try:
                self.media_store.delete(asset_id)
            except MediaStoreError as e:
                logger.warning(f"Failed to delete asset {asset_id} of product {product_id}: {e}")
                failed.append(asset_id)

        if failed:
            logger.error(f"Keeping product {product_id}; assets not deleted: {failed}")
            raise AssetCleanupError(failed)

        self.product_repo.delete(product)
        logger.info(f"Deleted product {product_id} and {len(asset_ids)} asset(s)")
