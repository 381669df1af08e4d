"""Analysis orchestration for a scanned product."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from nutriscan.domain.products import ProductRecord
from nutriscan.domain.verdict import AnalysisVerdict
from nutriscan.services.allergens import AllergenMatcher
from nutriscan.services.dietary import DietaryChecker
from nutriscan.services.goals import GoalTracker
from nutriscan.services.health import HealthScorer
from nutriscan.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """Run every analyzer over one product and merge the results."""

    profile_service: ProfileService
    allergen_matcher: AllergenMatcher
    dietary_checker: DietaryChecker
    goal_tracker: GoalTracker
    health_scorer: HealthScorer

    def analyze(
        self, product: ProductRecord, serving_size: float = 100
    ) -> AnalysisVerdict:
        """Return the merged verdict; the intake ledger is not changed."""
        profile = self.profile_service.get_profile()
        verdict = AnalysisVerdict(
            product=product,
            allergens=self.allergen_matcher.detect(product, profile.allergens),
            dietary=self.dietary_checker.check(product, profile.diet),
            goals=self.goal_tracker.project(product, serving_size),
            health=self.health_scorer.score(product),
            avoided_ingredients=_match_avoided(product, profile.avoid_ingredients),
            analyzed_at=datetime.now(tz=UTC),
        )
        _logger.info(
            "Analyzed %s: health=%s allergen_level=%s diet_compatible=%s",
            product.barcode,
            verdict.health.score,
            verdict.allergens.warning.level,
            verdict.dietary.compatible,
        )
        return verdict


def _match_avoided(
    product: ProductRecord, avoid_ingredients: frozenset[str]
) -> tuple[str, ...]:
    text = (product.ingredients_text or "").lower()
    names = [item.name.lower() for item in product.ingredients if item.name]
    return tuple(
        sorted(
            term
            for term in avoid_ingredients
            if term in text or any(term in name for name in names)
        )
    )
