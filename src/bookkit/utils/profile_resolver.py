"""Utility for resolving profile names to IDs."""

from bookkit.domain.profile import ProfileService


def resolve_profile(profile_service: ProfileService, user_id: str, profile: str) -> str:
    """Resolve profile name or ID to profile ID.

    Args:
        profile_service: ProfileService instance
        user_id: Owning user
        profile: Profile ID or profile name

    Returns:
        Profile ID

    Raises:
        ValueError: If no profile of the user matches
    """
    profiles = profile_service.list_profiles(user_id)

    # IDs take precedence over names
    for candidate in profiles:
        if candidate.id == profile:
            return candidate.id

    matches = [candidate for candidate in profiles if candidate.name == profile]
    if len(matches) == 1:
        return matches[0].id

    raise ValueError(f"Profile '{profile}' not found")
