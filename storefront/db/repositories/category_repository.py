# storefront/db/repositories/category_repository.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from storefront.db.models.category import Category


class CategoryRepository:
    """Repository for CRUD operations on Category model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID"""
        return self.db_session.query(Category).filter(Category.id == category_id).first()

    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        return self.db_session.query(Category).filter(Category.slug == slug).first()

    def list(self) -> List[Category]:
        """List categories ordered by name"""
        return self.db_session.query(Category).order_by(Category.name).all()

    def create(self, name: str, slug: str, description: Optional[str] = None) -> Category:
        """Create a new category"""
        db_category = Category(name=name.strip(), slug=slug, description=description)

        # Add to session and commit
        self.db_session.add(db_category)
        self.db_session.commit()
        self.db_session.refresh(db_category)

        return db_category
