# storefront/services/category_service.py
from typing import List, Optional
from uuid import UUID
from storefront.core.exceptions import ValidationError
from storefront.db.repositories.category_repository import CategoryRepository
from storefront.schemas.category import CategoryCreate, CategoryInDB
from storefront.utils.slug import slugify


class CategoryService:
    """Service for category-related business logic"""

    def __init__(self, db_session):
        self.category_repo = CategoryRepository(db_session)

    def get_category(self, category_id: UUID) -> Optional[CategoryInDB]:
        """Get category by ID"""
        category = self.category_repo.get_by_id(category_id)
        if not category:
            return None
        return CategoryInDB.model_validate(category)

    def list_categories(self) -> List[CategoryInDB]:
        """List categories ordered by name"""
        categories = self.category_repo.list()
        return [CategoryInDB.model_validate(category) for category in categories]

    def create_category(self, category_data: CategoryCreate) -> CategoryInDB:
        """Create a new category"""
        name = category_data.name.strip()
        if not name:
            raise ValidationError("name is required", field="name")

        slug = slugify(category_data.slug or name)
        if not slug:
            raise ValidationError("slug must contain letters or digits", field="slug")

        # Check if category with same slug already exists
        if self.category_repo.get_by_slug(slug):
            raise ValidationError(f"Category with slug '{slug}' already exists", field="slug")

        category = self.category_repo.create(name, slug, category_data.description)
        return CategoryInDB.model_validate(category)
