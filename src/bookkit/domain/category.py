"""Category domain service."""

from typing import Optional
from bookkit.database.base import Database
from bookkit.domain.entities import Category, TransactionType
from bookkit.domain.errors import ConflictError, ValidationError, duplicate_category


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        user_id: str,
        name: str,
        category_type: str = "EXPENSE",
        business_profile_id: Optional[str] = None,
    ) -> int:
        """Create a category.

        Args:
            user_id: Owning user
            name: Category name, unique within the profile
            category_type: INCOME or EXPENSE
            business_profile_id: Profile the category belongs to

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or the type unknown
            ConflictError: If the profile already has a category with that name
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        try:
            kind = TransactionType(category_type.upper())
        except ValueError:
            raise ValidationError(f"Unknown category type '{category_type}'")

        if self.find_category(user_id, business_profile_id, name) is not None:
            raise ConflictError(duplicate_category(name, business_profile_id))

        return self.db.create_category(
            user_id=user_id,
            business_profile_id=business_profile_id,
            name=name,
            category_type=kind.value,
        )

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def find_category(
        self, user_id: str, business_profile_id: Optional[str], name: str
    ) -> Optional[Category]:
        """Find a category of a profile by exact name."""
        for category in self.db.list_categories(user_id, business_profile_id):
            if category.name == name:
                return category
        return None

    def list_categories(self, user_id: str, business_profile_id: Optional[str] = None) -> list[Category]:
        """List categories of a profile."""
        return self.db.list_categories(user_id, business_profile_id)
