"""Dietary compatibility checks for the active diet."""

from dataclasses import dataclass

from nutriscan.domain.catalogs import STANDARD_DIET, DietCatalog
from nutriscan.domain.products import ProductRecord
from nutriscan.domain.verdict import (
    DietRecommendation,
    DietReport,
    DietViolation,
    DietWarning,
)

VIOLATION_PENALTY = 30
WARNING_PENALTY = 10


@dataclass
class DietaryChecker:
    """Check products against a diet's forbidden and cautionary terms."""

    catalog: DietCatalog

    def check(self, product: ProductRecord, diet: str) -> DietReport:
        """Return violations, warnings and a compatibility score for a diet.

        Forbidden terms are matched against the ingredient text and every
        structured ingredient name. Caution phrases and high-carbohydrate
        terms are matched against the ingredient text only.
        """
        rule = self.catalog.get(diet) if diet != STANDARD_DIET else None
        violations: list[DietViolation] = []
        warnings: list[DietWarning] = []

        if rule is not None:
            text = (product.ingredients_text or "").lower()
            names = [item.name.lower() for item in product.ingredients if item.name]

            for term in rule.forbidden:
                if term in text or any(term in name for name in names):
                    violations.append(
                        DietViolation(
                            ingredient=term,
                            reason=f"Not suitable for {diet} diet",
                        )
                    )

            for phrase in rule.cautions:
                if phrase in text:
                    warnings.append(
                        DietWarning(
                            message=phrase,
                            reason=f"May not be suitable for {diet} diet",
                        )
                    )

            carbs = tuple(term for term in rule.high_carb if term in text)
            if carbs:
                warnings.append(
                    DietWarning(message="High carbohydrate content", ingredients=carbs)
                )

        score = 100 - VIOLATION_PENALTY * len(violations)
        score -= WARNING_PENALTY * len(warnings)
        return DietReport(
            diet=diet,
            compatible=not violations,
            score=max(0, min(100, score)),
            violations=tuple(violations),
            warnings=tuple(warnings),
            recommendation=_recommend(violations, warnings, diet),
        )


def _recommend(
    violations: list[DietViolation], warnings: list[DietWarning], diet: str
) -> DietRecommendation:
    if violations:
        return DietRecommendation(
            suitable=False,
            message=f"This product is NOT suitable for a {diet} diet",
            details=". ".join(violation.reason for violation in violations),
        )
    if warnings:
        return DietRecommendation(
            suitable=True,
            message=f"This product may be suitable for a {diet} diet with caution",
            details=". ".join(warning.message for warning in warnings),
        )
    return DietRecommendation(
        suitable=True,
        message=f"This product appears suitable for a {diet} diet",
        details="No dietary violations detected",
    )
