"""Offer endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from storefront.api.routes.common import run_service
from storefront.core.auth import api_key_auth_admin
from storefront.db.base import get_db_session
from storefront.schemas.offer import OfferCreate
from storefront.services.offer_service import OfferService

offers_router = APIRouter(prefix="/offers")


@offers_router.get("", status_code=status.HTTP_200_OK, summary="List offers")
async def list_offers(db: Session = Depends(get_db_session)) -> Dict[str, Any]:
    service = OfferService(db)
    offers = await run_service("listing offers", service.list_offers)
    return {"offers": [offer.to_json() for offer in offers]}


@offers_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create an offer",
    dependencies=[Depends(api_key_auth_admin)],
)
async def create_offer(
    offer_data: OfferCreate,
    db: Session = Depends(get_db_session),
) -> Dict[str, Any]:
    service = OfferService(db)
    offer = await run_service("creating offer", service.create_offer, offer_data)
    return {"message": "Offer created", "offer": offer.to_json()}
