# storefront/services/offer_service.py
from typing import List
from storefront.core.exceptions import ValidationError
from storefront.db.repositories.offer_repository import OfferRepository
from storefront.schemas.offer import OfferCreate, OfferInDB


class OfferService:
    """Service for offer-related business logic"""

    def __init__(self, db_session):
        self.offer_repo = OfferRepository(db_session)

    def list_offers(self) -> List[OfferInDB]:
        """List offers, newest first"""
        offers = self.offer_repo.list()
        return [OfferInDB.model_validate(offer) for offer in offers]

    def create_offer(self, offer_data: OfferCreate) -> OfferInDB:
        """Create a new offer"""
        if offer_data.starts_at and offer_data.ends_at and offer_data.ends_at < offer_data.starts_at:
            raise ValidationError("endsAt must not be before startsAt", field="endsAt")

        offer = self.offer_repo.create(offer_data)
        return OfferInDB.model_validate(offer)
