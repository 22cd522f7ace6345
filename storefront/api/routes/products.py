"""Product read and write endpoints"""
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from storefront.api.forms import parse_product_form
from storefront.api.routes.common import run_service
from storefront.core.auth import api_key_auth_admin
from storefront.core.dependencies import get_media_store
from storefront.db.base import get_db_session
from storefront.services.product_query_service import ProductQueryService
from storefront.services.product_write_service import ProductWriteService
from storefront.storage.base import MediaStore


products_router = APIRouter(
    prefix="/products",
    responses={
        404: {"description": "Product not found"},
        500: {"description": "Server error"},
    },
)

ID_OR_SLUG = Path(..., description="Product slug or product id")


@products_router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List active products",
    description="Active products, newest first, with rating aggregates and the joined category and offer.",
)
async def list_products(db: Session = Depends(get_db_session)) -> Dict[str, Any]:
    service = ProductQueryService(db)
    products = await run_service("listing products", service.list_products)
    return {"products": [product.to_json() for product in products]}


@products_router.get(
    "/{id_or_slug}",
    status_code=status.HTTP_200_OK,
    summary="Get one product",
    description="Resolve a product by slug first, then by id.",
)
async def get_product(
    id_or_slug: str = ID_OR_SLUG,
    db: Session = Depends(get_db_session),
) -> Dict[str, Any]:
    service = ProductQueryService(db)
    product = await run_service(f"fetching product {id_or_slug}", service.get_product, id_or_slug)
    return {"product": product.to_json()}


@products_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="Multipart form with product fields, one mainImage and any number of galleryImages.",
    dependencies=[Depends(api_key_auth_admin)],
)
async def create_product(
    request: Request,
    db: Session = Depends(get_db_session),
    media_store: MediaStore = Depends(get_media_store),
) -> Dict[str, Any]:
    """
    Create a product.

    Every field is validated before any image is uploaded. If the insert
    fails, images uploaded for this request are deleted again.
    """
    form = await request.form()
    try:
        payload, main_images, gallery_images = parse_product_form(form)
        service = ProductWriteService(db, media_store)
        product = await run_service(
            "creating product", service.create_product, payload, main_images, gallery_images
        )
    finally:
        await form.close()
    return {"message": "Product created", "product": product.to_json()}


@products_router.put(
    "/{id_or_slug}",
    status_code=status.HTTP_200_OK,
    summary="Update a product",
    description="Multipart form; only the fields present are changed. New images replace the stored ones.",
    dependencies=[Depends(api_key_auth_admin)],
)
async def update_product(
    request: Request,
    id_or_slug: str = ID_OR_SLUG,
    db: Session = Depends(get_db_session),
    media_store: MediaStore = Depends(get_media_store),
) -> Dict[str, Any]:
    form = await request.form()
    try:
        payload, main_images, gallery_images = parse_product_form(form)
        service = ProductWriteService(db, media_store)
        product = await run_service(
            f"updating product {id_or_slug}",
            service.update_product,
            id_or_slug,
            payload,
            main_images,
            gallery_images,
        )
    finally:
        await form.close()
    return {"message": "Product updated", "product": product.to_json()}


@products_router.delete(
    "/{id_or_slug}",
    status_code=status.HTTP_200_OK,
    summary="Delete a product",
    description="Deletes every media asset of the product, then the product itself.",
    dependencies=[Depends(api_key_auth_admin)],
)
async def delete_product(
    id_or_slug: str = ID_OR_SLUG,
    db: Session = Depends(get_db_session),
    media_store: MediaStore = Depends(get_media_store),
) -> Dict[str, Any]:
    service = ProductWriteService(db, media_store)
    await run_service(f"deleting product {id_or_slug}", service.delete_product, id_or_slug)
    return {"message": "Product deleted"}
