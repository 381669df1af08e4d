"""Supabase repository for the user profile."""

from dataclasses import dataclass

from nutriscan.adapters.supabase_documents import SupabaseDocumentTable
from nutriscan.domain.profile import UserProfile
from nutriscan.services.profiles import ProfileRepository

PROFILE_KEY = "user_profile"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the user profile."""

    documents: SupabaseDocumentTable

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile."""
        data = self.documents.get(PROFILE_KEY)
        if not isinstance(data, dict):
            return None
        return UserProfile(
            diet=str(data.get("diet") or UserProfile().diet),
            allergens=frozenset(data.get("allergens") or []),
            avoid_ingredients=frozenset(data.get("avoid_ingredients") or []),
        )

    def save_profile(self, profile: UserProfile) -> None:
        """Persist the profile."""
        self.documents.put(
            PROFILE_KEY,
            {
                "diet": profile.diet,
                "allergens": sorted(profile.allergens),
                "avoid_ingredients": sorted(profile.avoid_ingredients),
            },
        )
