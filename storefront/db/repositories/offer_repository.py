# storefront/db/repositories/offer_repository.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from storefront.db.models.offer import Offer
from storefront.schemas.offer import OfferCreate


class OfferRepository:
    """Repository for CRUD operations on Offer model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, offer_id: UUID) -> Optional[Offer]:
        """Get offer by ID"""
        return self.db_session.query(Offer).filter(Offer.id == offer_id).first()

    def list(self) -> List[Offer]:
        """List offers, newest first"""
        return self.db_session.query(Offer).order_by(Offer.created_at.desc()).all()

    def create(self, offer_data: OfferCreate) -> Offer:
        """Create a new offer"""
        # Convert Pydantic model to dict
        offer_dict = offer_data.model_dump()

        # Create new Offer model instance
        db_offer = Offer(**offer_dict)

        # Add to session and commit
        self.db_session.add(db_offer)
        self.db_session.commit()
        self.db_session.refresh(db_offer)

        return db_offer
