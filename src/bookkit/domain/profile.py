"""Business profile domain service."""

from typing import Optional
from bookkit.database.base import Database
from bookkit.domain.entities import BusinessProfile, ProfileType
from bookkit.domain.errors import ConflictError, NotFoundError, ValidationError, profile_not_found


class ProfileService:
    """Service for managing the ledger partitions of a user."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_profile(
        self, user_id: str, name: str, profile_type: str = "BUSINESS", profile_id: Optional[str] = None
    ) -> str:
        """Create a business profile.

        Args:
            user_id: Owning user
            name: Profile name, unique per user
            profile_type: PERSONAL or BUSINESS
            profile_id: Optional explicit ID (generated if omitted)

        Returns:
            Profile ID

        Raises:
            ValidationError: If the profile type is unknown
            ConflictError: If the user already has a profile with that name
        """
        try:
            kind = ProfileType(profile_type.upper())
        except ValueError:
            raise ValidationError(f"Unknown profile type '{profile_type}'")

        for profile in self.db.list_profiles(user_id):
            if profile.name == name:
                raise ConflictError(f"Profile with name '{name}' already exists")

        return self.db.create_profile(user_id=user_id, name=name, profile_type=kind.value, profile_id=profile_id)

    def get_profile(self, profile_id: str) -> Optional[BusinessProfile]:
        """Get profile by ID, or None if not found."""
        return self.db.get_profile(profile_id)

    def require_profile(self, user_id: str, profile_id: str) -> BusinessProfile:
        """Get a profile owned by the user.

        Raises:
            NotFoundError: If the profile does not exist or belongs to someone else
        """
        profile = self.db.get_profile(profile_id)
        if profile is None or profile.user_id != user_id:
            raise NotFoundError(profile_not_found(profile_id))
        return profile

    def list_profiles(self, user_id: str) -> list[BusinessProfile]:
        """List a user's profiles."""
        return self.db.list_profiles(user_id)
