"""User dietary profile store."""

import logging
from dataclasses import dataclass, field, replace
from typing import Protocol

from nutriscan.domain.catalogs import AllergenCatalog, DietCatalog
from nutriscan.domain.profile import UserProfile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Persist the profile."""


@dataclass
class ProfileService:
    """Read and update the profile, validating every change against the catalogs.

    Setters return ``False`` and leave the profile untouched when given a
    value outside the catalogs. The profile is read from the repository on
    every call. While a read fails, accepted changes are kept in memory only
    and are never written over the stored profile.
    """

    repository: ProfileRepository
    allergen_catalog: AllergenCatalog
    diet_catalog: DietCatalog
    _offline_profile: UserProfile | None = field(default=None, init=False, repr=False)

    def get_profile(self) -> UserProfile:
        """Return the current profile."""
        profile, _stored = self._read()
        return profile

    def set_diet(self, diet: str) -> bool:
        """Set the active diet."""
        if diet not in self.diet_catalog:
            _logger.info("Rejected unknown diet %r", diet)
            return False
        profile, stored = self._read()
        self._update(replace(profile, diet=diet), stored)
        return True

    def add_allergen(self, allergen: str) -> bool:
        """Declare an allergen category."""
        if allergen not in self.allergen_catalog:
            _logger.info("Rejected unknown allergen %r", allergen)
            return False
        profile, stored = self._read()
        if allergen not in profile.allergens:
            self._update(
                replace(profile, allergens=profile.allergens | {allergen}), stored
            )
        return True

    def remove_allergen(self, allergen: str) -> bool:
        """Remove a declared allergen category."""
        if allergen not in self.allergen_catalog:
            _logger.info("Rejected unknown allergen %r", allergen)
            return False
        profile, stored = self._read()
        if allergen in profile.allergens:
            self._update(
                replace(profile, allergens=profile.allergens - {allergen}), stored
            )
        return True

    def add_avoid_ingredient(self, ingredient: str) -> bool:
        """Add an extra ingredient to avoid."""
        term = ingredient.strip().lower()
        if not term:
            return False
        profile, stored = self._read()
        if term not in profile.avoid_ingredients:
            self._update(
                replace(profile, avoid_ingredients=profile.avoid_ingredients | {term}),
                stored,
            )
        return True

    def remove_avoid_ingredient(self, ingredient: str) -> bool:
        """Remove an ingredient from the avoid list."""
        term = ingredient.strip().lower()
        profile, stored = self._read()
        if term not in profile.avoid_ingredients:
            return False
        self._update(
            replace(profile, avoid_ingredients=profile.avoid_ingredients - {term}),
            stored,
        )
        return True

    def _update(self, profile: UserProfile, stored: bool) -> None:
        if not stored:
            self._offline_profile = profile
            _logger.warning("Profile store unreadable, keeping profile in memory only")
            return
        self._offline_profile = None
        try:
            self.repository.save_profile(profile)
        except Exception:
            _logger.exception("Failed to persist user profile")

    def _read(self) -> tuple[UserProfile, bool]:
        """Return the profile and whether it came from a successful read."""
        try:
            stored = self.repository.get_profile()
        except Exception:
            _logger.exception("Failed to load user profile, using in-memory profile")
            return self._offline_profile or UserProfile(), False
        if stored is None:
            return UserProfile(), True
        return self._sanitize(stored), True

    def _sanitize(self, profile: UserProfile) -> UserProfile:
        """Drop stored values that are no longer in the catalogs."""
        diet = profile.diet
        if diet not in self.diet_catalog:
            _logger.warning("Stored diet %r is unknown, using default", diet)
            diet = UserProfile().diet
        allergens = frozenset(
            name for name in profile.allergens if name in self.allergen_catalog
        )
        if allergens != profile.allergens:
            _logger.warning(
                "Dropped unknown stored allergens: %s",
                sorted(profile.allergens - allergens),
            )
        return replace(profile, diet=diet, allergens=allergens)
